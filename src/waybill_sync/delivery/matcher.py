#!/usr/bin/env python3
"""
Waybill/Order Record Matcher

Joins waybill records to pending orders by recipient identity. The identity key
is normalised on both sides (whitespace removed from the name, everything but
digits removed from the phone) so "010-1234-5678" and "01012345678" match.
"""

import re
from collections.abc import Iterable

from .models import MatchedOrder, PendingOrder, WaybillRecord

_WHITESPACE = re.compile(r"\s+")
_NON_DIGIT = re.compile(r"\D")


def identity_key(name: str, phone: str) -> str:
    """Build the normalised recipient identity key."""
    return f"{_WHITESPACE.sub('', name)}-{_NON_DIGIT.sub('', phone)}"


def build_waybill_index(waybills: Iterable[WaybillRecord]) -> dict[str, WaybillRecord]:
    """
    Index waybills by identity key in one pass.

    When two records share a key the later one wins.
    """
    index: dict[str, WaybillRecord] = {}
    for waybill in waybills:
        index[identity_key(waybill.recipient_name, waybill.recipient_phone)] = waybill
    return index


def match_orders(waybills: Iterable[WaybillRecord], orders: Iterable[PendingOrder]) -> list[MatchedOrder]:
    """
    Match pending orders to waybills by identity key.

    Orders without a waybill are dropped. Output keeps the input order of ``orders``.
    """
    index = build_waybill_index(waybills)

    matched = []
    for order in orders:
        waybill = index.get(identity_key(order.recipient_name, order.recipient_phone))
        if waybill is not None:
            matched.append(MatchedOrder(order=order, waybill=waybill))
    return matched
