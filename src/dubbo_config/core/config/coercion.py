"""Value coercion between raw strings and primitive field types."""

from __future__ import annotations

from typing import Any

from .registry import Char, FieldMetadata

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Cannot convert {value!r} to bool")


def _coerce_char(value: str) -> str:
    return value[0] if value else "\0"


def convert_primitive(raw: str, field_meta: FieldMetadata) -> Any:
    """Convert a raw string to the field's primitive type.

    Raises ``ValueError`` when the text is not a valid literal of that type.
    """
    target = field_meta.type
    if target is Char:
        return _coerce_char(raw)
    if target is bool:
        return _coerce_bool(raw)
    if target is int:
        return int(raw.strip())
    if target is float:
        return float(raw.strip())
    return raw


def to_parameter_string(value: Any) -> str:
    """String form of a field value as written to a parameter map."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()
