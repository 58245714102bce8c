"""Conversion of query parameter values into their MediaWiki wire form."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


def format_value(value: Any) -> Optional[str]:
    """
    Render one parameter value, or return ``None`` when the parameter must be omitted.

    MediaWiki boolean parameters are true when present, so ``False`` is dropped.
    """
    if value is None or value is False:
        return None
    if value is True:
        return "1"
    if isinstance(value, enum.Enum):
        return format_value(value.value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        return "|".join(str(format_value(v)) for v in items if format_value(v) is not None)
    return str(value)


def to_wire_params(params: Mapping[str, Any]) -> Dict[str, str]:
    """Normalize a parameter mapping, keeping key order, and force the JSON envelope."""

    wire: Dict[str, str] = {}
    for key, value in params.items():
        text = format_value(value)
        if text is not None:
            wire[key] = text
    wire["format"] = "json"
    wire.setdefault("formatversion", "2")
    return wire
