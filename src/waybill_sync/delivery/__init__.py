"""
Delivery Reconciliation Package

Reconciles order-management waybills with open marketplace orders and uploads
the result as invoices.

Key Components:
- matcher: Joins waybills to orders by normalised recipient identity
- carriers: Carrier display name to delivery company code table
- assembler: Builds upload-ready invoices from matched orders
- notifier: Detached mail notifications for upload outcomes and job errors
- job: The reconciliation job and its outer error handling
"""

from .assembler import assemble_invoice, assemble_invoices, canonical_carrier_name
from .carriers import CARRIER_CODES, DIRECT_DELIVERY_CODE, resolve_delivery_company_code
from .job import ReconciliationJob, run_reconciliation
from .matcher import build_waybill_index, identity_key, match_orders
from .models import (
    Invoice,
    MatchedOrder,
    PendingOrder,
    UploadOutcome,
    UploadPartitions,
    WaybillRecord,
)
from .notifier import OutcomeNotifier

__all__ = [
    # Domain models
    "Invoice",
    "MatchedOrder",
    "PendingOrder",
    "UploadOutcome",
    "UploadPartitions",
    "WaybillRecord",
    # Carrier codes
    "CARRIER_CODES",
    "DIRECT_DELIVERY_CODE",
    "resolve_delivery_company_code",
    # Matching and assembly
    "assemble_invoice",
    "assemble_invoices",
    "build_waybill_index",
    "canonical_carrier_name",
    "identity_key",
    "match_orders",
    # Job and notification
    "OutcomeNotifier",
    "ReconciliationJob",
    "run_reconciliation",
]
