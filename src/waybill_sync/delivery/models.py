#!/usr/bin/env python3
"""
Delivery Domain Models

Type-safe models for the records exchanged with the order-management service
(waybills) and the marketplace (pending orders, invoice uploads, upload outcomes).

Wire dictionaries are decoded at the boundary with ``from_dict`` constructors that
raise ResponseDecodeError on missing required fields, and encoded back with
``to_dict`` in the marketplace's camelCase shape.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.messaging import ResponseDecodeError

UPLOAD_SUCCESS = "success"
UPLOAD_FAILED = "failed"

_ORDER_ALIASES = ("order_id", "recipient_name", "recipient_phone")


def _require_str(data: Mapping[str, Any], keys: tuple[str, ...], record_type: str) -> str:
    """Return the first present key among ``keys`` as a string."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return str(value)
    raise ResponseDecodeError(f"{record_type} is missing required field '{keys[0]}'")


def _require_mapping(data: Any, record_type: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ResponseDecodeError(f"{record_type} must be an object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class WaybillRecord:
    """
    Shipment/tracking assignment extracted from the order-management system.

    Keyed by recipient identity; immutable once received.
    """

    recipient_name: str
    recipient_phone: str
    carrier_name: str  # Free-text carrier display name, e.g. "CJ대한통운"
    tracking_number: str

    @classmethod
    def from_dict(cls, data: Any) -> "WaybillRecord":
        """
        Create WaybillRecord from an order-management payload entry.

        Accepts the service's wire keys (``nameText``, ``phoneText``, ``courier``,
        ``invoiceNumber``) as well as this model's own snake_case names.
        """
        data = _require_mapping(data, "WaybillRecord")
        return cls(
            recipient_name=_require_str(data, ("nameText", "recipient_name"), "WaybillRecord"),
            recipient_phone=_require_str(data, ("phoneText", "recipient_phone"), "WaybillRecord"),
            carrier_name=_require_str(data, ("courier", "carrier_name"), "WaybillRecord"),
            tracking_number=_require_str(
                data, ("invoiceNumber", "trackingNumber", "tracking_number"), "WaybillRecord"
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nameText": self.recipient_name,
            "phoneText": self.recipient_phone,
            "courier": self.carrier_name,
            "invoiceNumber": self.tracking_number,
        }


@dataclass(frozen=True)
class PendingOrder:
    """
    Open marketplace order awaiting shipment instruction (or already departed).

    Only the identity fields are modelled; every other marketplace field is kept
    verbatim in ``extra`` so the upload request can return the order unchanged.
    Rows without an ``orderId`` are identified by their ``shipmentBoxId``.
    """

    order_id: str | int
    recipient_name: str
    recipient_phone: str
    extra: dict[str, Any] = field(default_factory=dict, compare=False)
    id_field: str = field(default="orderId", compare=False)  # Wire key the id is uploaded under

    @classmethod
    def from_dict(cls, data: Any) -> "PendingOrder":
        """Create PendingOrder from a marketplace order payload entry."""
        data = _require_mapping(data, "PendingOrder")

        id_field = "orderId"
        order_id = data.get("orderId", data.get("order_id"))
        if order_id is None:
            id_field = "shipmentBoxId"
            order_id = data.get("shipmentBoxId")
        if order_id is None:
            raise ResponseDecodeError("PendingOrder is missing required field 'orderId' or 'shipmentBoxId'")

        # Snake_case aliases are decoded into the model, never uploaded back
        extra = {key: value for key, value in data.items() if key not in _ORDER_ALIASES}

        return cls(
            order_id=order_id,
            recipient_name=_require_str(data, ("receiverName", "recipient_name"), "PendingOrder"),
            recipient_phone=_require_str(data, ("receiverMobile", "recipient_phone"), "PendingOrder"),
            extra=extra,
            id_field=id_field,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            self.id_field: self.order_id,
            "receiverName": self.recipient_name,
            "receiverMobile": self.recipient_phone,
        }


@dataclass(frozen=True)
class MatchedOrder:
    """A pending order joined with exactly one waybill record."""

    order: PendingOrder
    waybill: WaybillRecord


@dataclass(frozen=True)
class Invoice:
    """
    Matched order enriched with canonical carrier information, ready for upload.

    ``courier_name`` is the waybill's carrier name after alias rewriting;
    ``delivery_company_code`` is its marketplace code.
    """

    order: PendingOrder
    waybill: WaybillRecord
    courier_name: str
    delivery_company_code: str

    @property
    def tracking_number(self) -> str:
        return self.waybill.tracking_number

    def to_dict(self) -> dict[str, Any]:
        """Encode in the marketplace upload shape (order fields plus courier block)."""
        courier = self.waybill.to_dict()
        courier["courier"] = self.courier_name
        return {
            **self.order.to_dict(),
            "courier": courier,
            "courierName": self.courier_name,
            "deliveryCompanyCode": self.delivery_company_code,
            "invoiceNumber": self.tracking_number,
        }


@dataclass(frozen=True)
class UploadOutcome:
    """Per-invoice result of an invoice upload, identified by its own status."""

    status: str
    detail: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "UploadOutcome":
        data = _require_mapping(data, "UploadOutcome")
        status = data.get("status")
        if not isinstance(status, str):
            raise ResponseDecodeError("UploadOutcome is missing required field 'status'")
        return cls(status=status, detail=dict(data))

    @property
    def is_success(self) -> bool:
        return self.status == UPLOAD_SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == UPLOAD_FAILED

    def to_dict(self) -> dict[str, Any]:
        return {**self.detail, "status": self.status}


@dataclass
class UploadPartitions:
    """
    Upload outcomes split by status.

    ``unknown`` holds outcomes whose status is neither success nor failed; they
    are reported in logs only and never notified.
    """

    successes: list[UploadOutcome] = field(default_factory=list)
    failures: list[UploadOutcome] = field(default_factory=list)
    unknown: list[UploadOutcome] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[UploadOutcome]) -> "UploadPartitions":
        partitions = cls()
        for outcome in outcomes:
            if outcome.is_success:
                partitions.successes.append(outcome)
            elif outcome.is_failure:
                partitions.failures.append(outcome)
            else:
                partitions.unknown.append(outcome)
        return partitions
