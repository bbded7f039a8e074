"""
Import of declarative annotation values into configuration objects.

An annotation is a frozen dataclass whose field defaults are the
annotation's declared defaults, e.g.::

    @dataclass(frozen=True)
    class Reference:
        version: str = ""
        filter: Tuple[str, ...] = ()

``append_annotation`` copies every member the caller actually set onto the
configuration field of the same name. Conversions between the annotation
shape and the field shape come from the target field's ``conversion``.
Importing is best effort: failures are logged and the next member is
processed.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Iterable

from dubbo_config.core.utils.logger import log_error

from .registry import Conversion, FieldMetadata, get_field

# annotation members that all describe the service interface
PROPERTY_SYNONYMS = {
    "interface_class": "interface",
    "interface_name": "interface",
}


def _declared_default(member: dataclasses.Field) -> Any:
    if member.default is not dataclasses.MISSING:
        return member.default
    if member.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
        return member.default_factory()  # type: ignore[misc]
    return dataclasses.MISSING


def _pairs_to_map(pairs: Iterable[str]) -> Dict[str, str]:
    items = list(pairs)
    if len(items) % 2:
        raise ValueError(f"Expected key/value pairs, got {len(items)} items")
    return {items[i]: items[i + 1] for i in range(0, len(items), 2)}


def convert_annotation_value(value: Any, field_meta: FieldMetadata) -> Any:
    if field_meta.conversion is Conversion.JOIN:
        return ",".join(value)
    if field_meta.conversion is Conversion.PAIRS_TO_MAP:
        return _pairs_to_map(value)
    return value


def append_annotation(config: Any, annotation_type: type, annotation: Any) -> None:
    """Copy the non-default members of ``annotation`` onto ``config``."""
    for member in dataclasses.fields(annotation_type):
        try:
            value = getattr(annotation, member.name)
            if value is None or value == _declared_default(member):
                continue
            prop = PROPERTY_SYNONYMS.get(member.name, member.name)
            field_meta = get_field(type(config), prop)
            if field_meta is None:
                continue
            setattr(config, prop, convert_annotation_value(value, field_meta))
        except Exception as exc:
            log_error(
                "ANNOTATION",
                f"Failed to import {annotation_type.__name__}.{member.name} "
                f"into {type(config).__name__}: {exc}",
                exception=exc,
            )
