#!/usr/bin/env python3
"""
Shipping Reconciliation Job

One end-to-end run: fetch new waybills from order management, fetch open orders
from the marketplace, match them by recipient identity, assemble invoices, upload
them in one batch, and notify the per-item outcomes.

Stages run strictly in sequence. Empty waybills, empty orders, and an empty match
set each end the run cleanly without any notification. Any collaborator error
aborts the run; ``execute`` turns it into a single job-error notification. Upload
notifications are detached tasks the job never awaits.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

from ..core.config import JobConfig, MessagingConfig
from ..core.json_utils import format_json
from ..core.messaging import MessageClient
from ..core.models import JobResult, JobStage, JobType, generate_job_id
from .assembler import assemble_invoices
from .matcher import match_orders
from .models import Invoice, PendingOrder, UploadOutcome, UploadPartitions, WaybillRecord
from .notifier import OutcomeNotifier

logger = logging.getLogger(__name__)


class ReconciliationJob:
    """Reconciles new waybills with open marketplace orders for one store."""

    job_type = JobType.SHIPPING

    def __init__(
        self,
        config: JobConfig,
        client: MessageClient,
        notifier: OutcomeNotifier,
        messaging: MessagingConfig | None = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the job.

        Args:
            config: Store and order-filter settings for this job
            client: Request/reply access to the collaborators
            notifier: Outcome notifier (shares the client's mail queue)
            messaging: Queue names; defaults to MessagingConfig()
            today: Clock for the trailing order window
        """
        self.config = config
        self.client = client
        self.notifier = notifier
        self.messaging = messaging or MessagingConfig()
        self.today = today

    def _prefix(self, job_id: str) -> str:
        return f"{self.job_type.tag}{job_id}"

    async def fetch_waybills(self, job_id: str) -> list[WaybillRecord]:
        pattern = "deliveryExtraction"
        reply = await self.client.send(
            self.messaging.onch_queue,
            pattern,
            {"cronId": job_id, "store": self.config.store_id, "type": self.job_type.value},
        )
        rows = reply.records(source=f"{self.messaging.onch_queue}/{pattern}")
        return [WaybillRecord.from_dict(row) for row in rows]

    def order_query(self, job_id: str) -> dict[str, Any]:
        """Build the open-order request, adding vendor and date window when configured."""
        query: dict[str, Any] = {
            "cronId": job_id,
            "type": self.job_type.value,
            "status": self.config.order_status.value,
        }
        if self.config.vendor_id and self.config.lookback_days > 0:
            today = self.today()
            query["vendorId"] = self.config.vendor_id
            query["from"] = (today - timedelta(days=self.config.lookback_days)).isoformat()
            query["to"] = today.isoformat()
        return query

    async def fetch_orders(self, job_id: str) -> list[PendingOrder]:
        pattern = "newGetCoupangOrderList"
        reply = await self.client.send(self.messaging.coupang_queue, pattern, self.order_query(job_id))
        rows = reply.records(source=f"{self.messaging.coupang_queue}/{pattern}")
        return [PendingOrder.from_dict(row) for row in rows]

    async def upload_invoices(self, job_id: str, invoices: list[Invoice]) -> list[UploadOutcome]:
        pattern = "uploadInvoices"
        reply = await self.client.send(
            self.messaging.coupang_queue,
            pattern,
            {
                "cronId": job_id,
                "type": self.job_type.value,
                "invoices": [invoice.to_dict() for invoice in invoices],
            },
        )
        rows = reply.records(source=f"{self.messaging.coupang_queue}/{pattern}")
        return [UploadOutcome.from_dict(row) for row in rows]

    def notify(self, partitions: UploadPartitions, job_id: str) -> None:
        """Schedule one detached notification per non-empty partition."""
        prefix = self._prefix(job_id)
        store = self.config.store_id

        if partitions.successes:
            try:
                self.notifier.notify_upload_successes(partitions.successes, store, log_prefix=prefix)
                logger.info(f"{prefix}: success notification scheduled")
            except Exception as e:
                logger.error(f"{JobType.ERROR.tag}{prefix}: could not schedule success notification: {e}")

        if partitions.failures:
            try:
                self.notifier.notify_upload_failures(partitions.failures, store, log_prefix=prefix)
                logger.info(f"{JobType.ERROR.tag}{prefix}: failure notification scheduled")
            except Exception as e:
                logger.error(f"{JobType.ERROR.tag}{prefix}: could not schedule failure notification: {e}")

    async def run(self, job_id: str, result: JobResult | None = None) -> JobResult:
        """
        Run every stage once. Collaborator errors propagate to the caller.

        Args:
            job_id: Id used in requests and log lines
            result: Optional result object updated in place as stages progress

        Returns:
            JobResult describing the last stage reached and the record counts
        """
        prefix = self._prefix(job_id)
        result = result or JobResult(job_id=job_id, success=True, stage=JobStage.FETCH_WAYBILLS)

        result.stage = JobStage.FETCH_WAYBILLS
        waybills = await self.fetch_waybills(job_id)
        result.waybills = len(waybills)
        if not waybills:
            logger.info(f"{prefix}: no newly registered waybills")
            return result

        result.stage = JobStage.FETCH_ORDERS
        orders = await self.fetch_orders(job_id)
        result.orders = len(orders)
        if not orders:
            logger.info(f"{prefix}: no open orders")
            return result

        result.stage = JobStage.MATCH
        logger.info(f"{prefix}: matching started")
        matched = match_orders(waybills, orders)
        result.matched = len(matched)
        if not matched:
            logger.info(f"{prefix}: no orders matched {len(waybills)} waybills")
            return result

        result.stage = JobStage.ASSEMBLE
        invoices = assemble_invoices(matched)

        result.stage = JobStage.UPLOAD
        outcomes = await self.upload_invoices(job_id, invoices)
        logger.info(f"{prefix}: invoice upload result\n{format_json([o.to_dict() for o in outcomes])}")
        if len(outcomes) != len(invoices):
            logger.warning(f"{prefix}: uploaded {len(invoices)} invoices but got {len(outcomes)} outcomes")

        partitions = UploadPartitions.from_outcomes(outcomes)
        result.succeeded = len(partitions.successes)
        result.failed = len(partitions.failures)
        result.unknown = len(partitions.unknown)
        if partitions.unknown:
            statuses = sorted({o.status for o in partitions.unknown})
            logger.warning(f"{prefix}: {len(partitions.unknown)} outcomes with unknown status {statuses}")

        result.stage = JobStage.NOTIFY
        self.notify(partitions, job_id)
        return result

    async def execute(self, job_id: str | None = None) -> JobResult:
        """
        Run the job with error handling.

        Any exception is logged and reported through exactly one job-error
        notification; the end marker is logged regardless of outcome. Never raises
        for collaborator failures.
        """
        job_id = job_id or generate_job_id()
        prefix = self._prefix(job_id)
        result = JobResult(job_id=job_id, success=True, stage=JobStage.FETCH_WAYBILLS)

        try:
            logger.info(f"{prefix}-{datetime.now():%H:%M:%S}: waybill registration started")
            return await self.run(job_id, result)
        except Exception as e:
            message = str(e) or type(e).__name__
            result.success = False
            result.error_message = message
            self.notifier.notify_job_error(self.job_type, self.config.store_id, job_id, message)
            logger.error(f"{JobType.ERROR.tag}{prefix}: {message}")
            return result
        finally:
            logger.info(f"{prefix}: waybill registration finished")


async def run_reconciliation(
    config: JobConfig,
    client: MessageClient,
    notifier: OutcomeNotifier | None = None,
    job_id: str | None = None,
    messaging: MessagingConfig | None = None,
) -> JobResult:
    """
    Run one reconciliation job end to end and wait for its notifications.

    Convenience entry point for the CLI and external triggers.
    """
    messaging = messaging or MessagingConfig()
    notifier = notifier or OutcomeNotifier(client, mail_queue=messaging.mail_queue)
    job = ReconciliationJob(config, client, notifier, messaging=messaging)

    result = await job.execute(job_id)
    await notifier.drain()
    return result
