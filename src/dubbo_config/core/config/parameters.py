"""
Materialization of resolved configuration objects into parameter maps.

``append_parameters`` flattens the primitive fields of a configuration into
a ``str -> str`` map that becomes the query string of a service address;
``append_attributes`` collects the object-valued fields marked as
attributes (callback instances and method names).

Both are strict: the map they return is published as part of the service
contract, so any failure aborts with a ``ConfigError`` instead of
producing a partial map.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote_plus

from dubbo_config.constants import DEFAULT_KEY

from .coercion import to_parameter_string
from .errors import ConfigError, MissingRequiredParameterError
from .registry import FieldKind, FieldMetadata, build_registry


def _prefixed(prefix: Optional[str], key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _escape(text: str) -> str:
    # form encoding with "*" kept and "~" encoded
    return quote_plus(text, safe="*").replace("~", "%7E")


def _append_value(
    parameters: Dict[str, str],
    config: Any,
    field_meta: FieldMetadata,
    prefix: Optional[str],
) -> None:
    key = field_meta.parameter_key
    value = getattr(config, field_meta.name)
    text = to_parameter_string(value) if value is not None else ""
    if not text:
        if field_meta.required:
            raise MissingRequiredParameterError(type(config).__name__, key)
        return

    if field_meta.escaped:
        text = _escape(text)
    if field_meta.append:
        parts = [parameters.get(f"{DEFAULT_KEY}.{key}"), parameters.get(key), text]
        text = ",".join(part for part in parts if part)
    parameters[_prefixed(prefix, key)] = text


def _append_extension_map(
    parameters: Dict[str, str],
    extra: Optional[Mapping[str, str]],
    prefix: Optional[str],
) -> None:
    if not extra:
        return
    for key, value in extra.items():
        parameters[_prefixed(prefix, key.replace("-", "."))] = value


def append_parameters(
    parameters: Dict[str, str],
    config: Any,
    prefix: Optional[str] = None,
) -> Dict[str, str]:
    """
    Add the parameters of ``config`` to ``parameters`` and return it.

    Args:
        parameters: Map being built; may already hold values contributed
                    by outer levels (``default.<key>``) or nested maps
        config: Resolved configuration instance (``None`` is a no-op)
        prefix: Optional key prefix, joined with ``.``

    Raises:
        MissingRequiredParameterError: A required field has no value
        ConfigError: Any other failure while reading the instance
    """
    if config is None:
        return parameters
    try:
        extensions = []
        for field_meta in build_registry(type(config)):
            if field_meta.extension and field_meta.kind is FieldKind.MAP:
                extensions.append(getattr(config, field_meta.name))
            elif field_meta.is_primitive and not field_meta.excluded:
                _append_value(parameters, config, field_meta, prefix)
        # free-form entries go last and win on key collision
        for extra in extensions:
            _append_extension_map(parameters, extra, prefix)
    except ConfigError:
        raise
    except Exception as exc:
        raise ConfigError(str(exc)) from exc
    return parameters


def materialize(config: Any, prefix: Optional[str] = None) -> Dict[str, str]:
    """Parameter map of a single configuration instance."""
    return append_parameters({}, config, prefix)


def append_attributes(
    attributes: Dict[str, Any],
    config: Any,
    prefix: Optional[str] = None,
) -> Dict[str, Any]:
    """Add every non-``None`` attribute field of ``config`` to ``attributes``."""
    if config is None:
        return attributes
    try:
        for field_meta in build_registry(type(config)):
            if not field_meta.attribute:
                continue
            if field_meta.kind not in (FieldKind.PRIMITIVE, FieldKind.OBJECT):
                continue
            value = getattr(config, field_meta.name)
            if value is not None:
                attributes[_prefixed(prefix, field_meta.attribute_key)] = value
    except Exception as exc:
        raise ConfigError(str(exc)) from exc
    return attributes


def materialize_attributes(config: Any, prefix: Optional[str] = None) -> Dict[str, Any]:
    """Attribute map of a single configuration instance."""
    return append_attributes({}, config, prefix)
