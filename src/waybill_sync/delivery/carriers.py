#!/usr/bin/env python3
"""
Carrier Code Table

Static mapping from carrier display names (as written by the order-management
service) to the marketplace's delivery company codes. Lookup is an exact string
match: case and spacing must match the keys below.
"""

# Code used for any carrier the marketplace does not know: seller direct delivery
DIRECT_DELIVERY_CODE = "DIRECT"

CARRIER_CODES: dict[str, str] = {
    "CJ대한통운": "CJGLS",
    "한진택배": "HANJIN",
    "롯데택배": "HYUNDAI",
    "우체국택배": "EPOST",
    "로젠택배": "KGB",
    "경동택배": "KDEXP",
    "대신택배": "DAESIN",
    "일양로지스": "ILYANG",
    "천일택배": "CHUNIL",
    "합동택배": "HDEXP",
    "건영택배": "KUNYOUNG",
    "호남택배": "HONAM",
    "GS편의점택배": "CVSNET",
    "CU편의점택배": "CUPARCEL",
    "농협택배": "NHLOGIS",
    "EMS": "EMS",
    "DHL": "DHL",
    "FEDEX": "FEDEX",
    "UPS": "UPS",
}


def resolve_delivery_company_code(carrier_name: str) -> str:
    """
    Resolve a carrier display name to its delivery company code.

    Unknown names resolve to DIRECT_DELIVERY_CODE rather than failing.
    """
    return CARRIER_CODES.get(carrier_name, DIRECT_DELIVERY_CODE)
