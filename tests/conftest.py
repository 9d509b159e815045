"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import asyncio
from typing import Any

import pytest

from waybill_sync.core.config import JobConfig
from waybill_sync.delivery.job import ReconciliationJob
from waybill_sync.delivery.notifier import OutcomeNotifier


@pytest.fixture
def job_config() -> JobConfig:
    """Job configuration for a single test store."""
    return JobConfig(store_id="store-1")


@pytest.fixture
def sample_waybill() -> dict[str, Any]:
    """Waybill as emitted by the order-management service."""
    return {
        "nameText": "김철수",
        "phoneText": "010-1111-2222",
        "courier": "CJ대한통운",
        "invoiceNumber": "612345678901",
    }


@pytest.fixture
def sample_order() -> dict[str, Any]:
    """Open marketplace order matching sample_waybill."""
    return {
        "orderId": 30000123456789,
        "shipmentBoxId": 700000123456789,
        "receiverName": "김철수",
        "receiverMobile": "01011112222",
        "orderedAt": "2024-08-15T10:12:00",
    }


@pytest.fixture
def run_job():
    """
    Run ReconciliationJob.execute to completion, then drain its notifications.

    Returns (result, notifier) so tests can inspect both.
    """

    def _run(client, config: JobConfig, job_id: str = "job-1", **job_kwargs):
        async def scenario():
            notifier = OutcomeNotifier(client)
            job = ReconciliationJob(config, client, notifier, **job_kwargs)
            result = await job.execute(job_id)
            await notifier.drain()
            return result, notifier

        return asyncio.run(scenario())

    return _run
