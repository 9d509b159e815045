#!/usr/bin/env python3
"""
Core Job Models

Enumerations and result structures shared by every reconciliation run.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class JobType(Enum):
    """Job type tags carried in collaborator requests and log prefixes."""

    SHIPPING = "SHIPPING"
    ERROR = "ERROR"

    @property
    def tag(self) -> str:
        """Log prefix form, e.g. ``[SHIPPING]``."""
        return f"[{self.value}]"


class OrderStatus(Enum):
    """Marketplace order status filters used when fetching open orders."""

    INSTRUCT = "INSTRUCT"  # Awaiting shipment instruction
    DEPARTURE = "DEPARTURE"  # Already departed


class JobStage(Enum):
    """Stages of a reconciliation run, in execution order."""

    FETCH_WAYBILLS = "fetch_waybills"
    FETCH_ORDERS = "fetch_orders"
    MATCH = "match"
    ASSEMBLE = "assemble"
    UPLOAD = "upload"
    NOTIFY = "notify"


@dataclass
class JobResult:
    """Summary of one reconciliation run."""

    job_id: str
    success: bool
    stage: JobStage  # Last stage reached
    waybills: int = 0
    orders: int = 0
    matched: int = 0
    succeeded: int = 0
    failed: int = 0
    unknown: int = 0
    error_message: str | None = None

    @property
    def uploaded(self) -> bool:
        return self.success and self.stage == JobStage.NOTIFY


def generate_job_id(now: datetime | None = None) -> str:
    """
    Generate a job id for log correlation.

    Format is ``HHMMSS-xxxx``: wall-clock time plus a short random suffix.
    Uniqueness only needs to hold within the log window of a single process.
    """
    now = now or datetime.now()
    return f"{now:%H%M%S}-{secrets.token_hex(2)}"
