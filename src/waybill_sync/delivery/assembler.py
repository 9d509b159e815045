#!/usr/bin/env python3
"""
Invoice Assembler

Turns matched orders into upload-ready invoices by canonicalising the carrier
name and resolving its delivery company code.
"""

from collections.abc import Iterable

from .carriers import resolve_delivery_company_code
from .models import Invoice, MatchedOrder

# The waybill source sometimes records Kyungdong's freight label instead of its parcel name
KYUNGDONG_FREIGHT = "경동화물"
KYUNGDONG_PARCEL = "경동택배"


def canonical_carrier_name(carrier_name: str) -> str:
    """Rewrite the Kyungdong freight alias to the parcel name; other names pass through."""
    if carrier_name == KYUNGDONG_FREIGHT:
        return KYUNGDONG_PARCEL
    return carrier_name


def assemble_invoice(matched: MatchedOrder) -> Invoice:
    """Build the invoice for one matched order. The alias is rewritten before code lookup."""
    courier_name = canonical_carrier_name(matched.waybill.carrier_name)
    return Invoice(
        order=matched.order,
        waybill=matched.waybill,
        courier_name=courier_name,
        delivery_company_code=resolve_delivery_company_code(courier_name),
    )


def assemble_invoices(matched_orders: Iterable[MatchedOrder]) -> list[Invoice]:
    return [assemble_invoice(matched) for matched in matched_orders]
