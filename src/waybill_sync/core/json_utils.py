#!/usr/bin/env python3
"""
JSON Utilities Module

Centralised JSON decoding for collaborator payloads and pretty formatting for
log output. Marketplace ids exceed 2**53, so payloads are always decoded with
Python's arbitrary-precision integers and never routed through floats.
"""

import json
from typing import Any


def loads_payload(data: Any) -> Any:
    """
    Decode a payload that may arrive either already parsed or as a JSON string.

    Args:
        data: Parsed value, JSON text, or None

    Returns:
        The parsed value (None stays None)

    Raises:
        json.JSONDecodeError: If ``data`` is a string that is not valid JSON
    """
    if isinstance(data, (str, bytes, bytearray)):
        return json.loads(data)
    return data


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False, default: Any = None) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
        default: Function to serialize non-JSON types (default: None)

    Returns:
        Pretty-printed JSON string
    """
    if default is not None:
        return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=default)
    return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys)
