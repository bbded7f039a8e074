"""
Property resolution for partially populated configuration objects.

``append_properties`` fills every unset primitive field of a configuration
instance from, in order of precedence:

1. environment override ``dubbo.<tag>.<id>.<property>``
2. environment override ``dubbo.<tag>.<property>``
3. persisted property ``dubbo.<tag>.<id>.<property>``
4. persisted property ``dubbo.<tag>.<property>``
5. persisted property under the legacy key of ``dubbo.<tag>.<property>``,
   converted to current semantics

Fields that already hold a value are never touched. Resolution is best
effort: a failure on one field is logged and the remaining fields are
still resolved. Missing required fields are reported later, when the
parameter map is built.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from dubbo_config.core.utils.logger import log_error, log_override

from .coercion import convert_primitive
from .legacy import convert_legacy_value, legacy_key_for
from .registry import FieldMetadata, build_registry, property_prefix
from .sources import PropertySource, get_environment, get_properties


def _lookup(source: PropertySource, key: str) -> Optional[str]:
    value = source.get(key)
    return value if value else None


def resolve_field_value(
    config: Any,
    field_meta: FieldMetadata,
    environment: PropertySource,
    properties: PropertySource,
) -> Optional[Tuple[str, str]]:
    """Return ``(source key, raw value)`` of the winning source, or ``None``."""
    prefix = property_prefix(type(config))
    config_id = getattr(config, "id", None)
    keys = []
    if config_id:
        keys.append(f"{prefix}{config_id}.{field_meta.property}")
    keys.append(f"{prefix}{field_meta.property}")

    for key in keys:
        value = _lookup(environment, key)
        if value is not None:
            log_override(environment.label, key, value)
            return key, value

    # an earlier field may have set this one as a side effect
    if getattr(config, field_meta.name) is not None:
        return None

    for key in keys:
        value = _lookup(properties, key)
        if value is not None:
            return key, value

    legacy_key = legacy_key_for(f"{prefix}{field_meta.property}")
    if legacy_key:
        value = convert_legacy_value(legacy_key, _lookup(properties, legacy_key))
        if value:
            log_override(f"legacy {properties.label}", legacy_key, value)
            return legacy_key, value
    return None


def append_properties(
    config: Any,
    environment: Optional[PropertySource] = None,
    properties: Optional[PropertySource] = None,
) -> None:
    """Fill unset primitive fields of ``config`` from overrides and properties."""
    if config is None:
        return
    environment = environment if environment is not None else get_environment()
    properties = properties if properties is not None else get_properties()

    for field_meta in build_registry(type(config)):
        if not field_meta.is_primitive:
            continue
        try:
            if getattr(config, field_meta.name) is not None:
                continue
            found = resolve_field_value(config, field_meta, environment, properties)
            if found is None:
                continue
            _, raw = found
            setattr(config, field_meta.name, convert_primitive(raw, field_meta))
        except Exception as exc:
            log_error(
                "RESOLVER",
                f"Failed to resolve {type(config).__name__}.{field_meta.name}: {exc}",
                exception=exc,
            )

