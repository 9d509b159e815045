#!/usr/bin/env python3
"""
Outcome Notifier

Fire-and-forget dispatch of upload and job-error notifications to the mail service.

Every notification runs as a detached asyncio task. The caller gets the task back
but never has to await it: a dispatch failure is logged by the task itself and is
never raised to the caller. Tasks are independent of the job that scheduled them,
so cancelling the job does not cancel an in-flight notification.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from ..core.messaging import MessageClient
from ..core.models import JobType
from .models import UploadOutcome

logger = logging.getLogger(__name__)


class OutcomeNotifier:
    """Schedules mail notifications for reconciliation outcomes."""

    def __init__(self, client: MessageClient, mail_queue: str = "mail-queue"):
        self.client = client
        self.mail_queue = mail_queue
        # Strong references keep scheduled tasks alive until they finish
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def notify_upload_successes(
        self, outcomes: Sequence[UploadOutcome], store: str, log_prefix: str = ""
    ) -> asyncio.Task:
        payload = {"successInvoiceUploads": [o.to_dict() for o in outcomes], "store": store}
        return self._dispatch("sendSuccessInvoiceUpload", payload, log_prefix or JobType.SHIPPING.tag)

    def notify_upload_failures(
        self, outcomes: Sequence[UploadOutcome], store: str, log_prefix: str = ""
    ) -> asyncio.Task:
        payload = {"failedInvoiceUploads": [o.to_dict() for o in outcomes], "store": store}
        return self._dispatch("sendFailedInvoiceUpload", payload, log_prefix or JobType.SHIPPING.tag)

    def notify_job_error(self, job_type: JobType, store: str, job_id: str, message: str) -> asyncio.Task:
        payload = {
            "cronType": job_type.value,
            "store": store,
            "cronId": job_id,
            "message": message,
        }
        return self._dispatch("sendErrorMail", payload, f"{JobType.ERROR.tag}{job_type.tag}{job_id}")

    async def drain(self) -> None:
        """Wait for every scheduled notification to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _dispatch(self, pattern: str, payload: dict[str, Any], log_prefix: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(
            self._deliver(pattern, payload, log_prefix), name=f"notify:{pattern}"
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, pattern: str, payload: dict[str, Any], log_prefix: str) -> bool:
        try:
            await self.client.emit(self.mail_queue, pattern, payload)
        except Exception as e:
            logger.error(f"{log_prefix}: notification '{pattern}' failed: {e}")
            return False

        logger.info(f"{log_prefix}: notification '{pattern}' sent")
        return True
