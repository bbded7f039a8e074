"""Tag-style text rendering of configuration objects, for diagnostics."""

from __future__ import annotations

from typing import Any

from dubbo_config.constants import PROPERTY_ROOT
from dubbo_config.core.utils.logger import log_warning

from .coercion import to_parameter_string
from .registry import FieldKind, build_registry, tag_of


def render_descriptor(config: Any) -> str:
    """``<dubbo:registry address="..." port="..." />``; never raises."""
    try:
        parts = [f"<{PROPERTY_ROOT}:{tag_of(type(config))}"]
        for field_meta in build_registry(type(config)):
            if field_meta.kind not in (FieldKind.PRIMITIVE, FieldKind.OBJECT):
                continue
            try:
                value = getattr(config, field_meta.name)
                if value is None:
                    continue
                if field_meta.is_primitive:
                    value = to_parameter_string(value)
                parts.append(f'{field_meta.display_name}="{value}"')
            except Exception as exc:
                log_warning("DESCRIPTOR", str(exc), exception=exc)
        return " ".join(parts) + " />"
    except Exception as exc:
        log_warning("DESCRIPTOR", str(exc), exception=exc)
        return object.__repr__(config)
