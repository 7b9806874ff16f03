"""Shared value types and parsing helpers for API entity snapshots."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from src.config.constants import (
    SERVER_ASSIGNED_FIELDS,
    SERVICE_TYPE_ALIASES,
    STATUS_ALIASES,
)


@dataclass(frozen=True)
class Address:
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Address":
        if not isinstance(data, Mapping):
            data = {}
        return cls(
            street=as_text(data.get("street")),
            city=as_text(data.get("city")),
            state=as_text(data.get("state")),
            zip=as_text(data.get("zip")),
        )


def normalize_status(kind: str, value: Any) -> Optional[str]:
    """Map a raw status to its canonical spelling.

    Values outside the canonical enum are returned unchanged so callers can
    treat them as unknown instead of failing on a schema they don't recognize.
    """
    if value is None:
        return None
    value = str(value)
    return STATUS_ALIASES.get(kind, {}).get(value, value)


def normalize_service_type(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return SERVICE_TYPE_ALIASES.get(value, value)


def as_text(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


def as_optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def as_float(value: Any, default: float = 0.0) -> float:
    """Coerce to a finite float; anything else becomes ``default``."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def reference_id(data: Mapping[str, Any], name: str) -> Optional[str]:
    """Id of a referenced entity, given embedded (``truck``) or flat (``truck_id``)."""
    value = data.get(name)
    if isinstance(value, Mapping):
        return as_optional_text(value.get("id"))
    if value is not None:
        return as_optional_text(value)
    return as_optional_text(data.get(f"{name}_id"))


def embedded(data: Mapping[str, Any], name: str) -> Optional[Mapping[str, Any]]:
    value = data.get(name)
    return value if isinstance(value, Mapping) else None


def creation_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Strip server-assigned fields from a resource body before POSTing it."""
    return {k: v for k, v in payload.items() if k not in SERVER_ASSIGNED_FIELDS}
