"""
Waybill Sync - Shipping Invoice Reconciliation

Matches newly registered waybills from the order-management service with open
marketplace orders, attaches carrier and tracking information, uploads the
result as invoices, and reports per-item outcomes by mail.

Domain Packages:
- core: Configuration, job models, collaborator messaging
- delivery: Matching, carrier codes, invoice assembly, notification, the job itself
- cli: Command-line interface

Example Usage:
    from waybill_sync.delivery import ReconciliationJob, match_orders
    from waybill_sync.core import JobConfig, HttpMessageClient
"""

__version__ = "0.1.0"
__author__ = "Waybill Sync Maintainers"

from .core.config import Config, JobConfig, get_config
from .core.models import JobResult, JobStage, JobType, OrderStatus
from .delivery.job import ReconciliationJob, run_reconciliation

__all__ = [
    # Configuration
    "Config",
    "JobConfig",
    "get_config",
    # Job models
    "JobResult",
    "JobStage",
    "JobType",
    "OrderStatus",
    # Reconciliation
    "ReconciliationJob",
    "run_reconciliation",
]
