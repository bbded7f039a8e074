"""
Validation utilities for configuration values.

Every check is stateless and strict: ``None`` and ``""`` are accepted as
"not configured", anything else must fit the length limit and, when a
pattern is given, match it completely. Failures raise
``PropertyValidationError``; unknown extension names raise
``NoSuchExtensionError``.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional, Pattern

from dubbo_config.constants import DEFAULT_KEY, REMOVE_VALUE_PREFIX
from dubbo_config.core.extension import ExtensionRegistry, get_extension_registry

from .errors import NoSuchExtensionError, PropertyValidationError

MAX_LENGTH = 200
MAX_PATH_LENGTH = 200

PATTERN_NAME = re.compile(r"[\-._0-9a-zA-Z]+")
PATTERN_MULTI_NAME = re.compile(r"[,\-._0-9a-zA-Z]+")
PATTERN_METHOD_NAME = re.compile(r"[a-zA-Z][0-9a-zA-Z]*")
PATTERN_PATH = re.compile(r"[/\-$._0-9a-zA-Z]+")
PATTERN_NAME_HAS_SYMBOL = re.compile(r"[:*,/\-._0-9a-zA-Z]+")
PATTERN_KEY = re.compile(r"[*,\-._0-9a-zA-Z]+")

_MULTI_SPLIT = re.compile(r"\s*[,]+\s*")


def check_property(
    property_name: str,
    value: Optional[str],
    max_length: int,
    pattern: Optional[Pattern[str]] = None,
) -> None:
    if value is None or len(value) == 0:
        return
    if len(value) > max_length:
        raise PropertyValidationError(property_name, value, max_length=max_length)
    if pattern is not None and pattern.fullmatch(value) is None:
        raise PropertyValidationError(
            property_name, value, max_length=max_length, pattern=pattern.pattern
        )


def check_length(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_LENGTH)


def check_path_length(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_PATH_LENGTH)


def check_name(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_LENGTH, PATTERN_NAME)


def check_name_has_symbol(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_LENGTH, PATTERN_NAME_HAS_SYMBOL)


def check_key(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_LENGTH, PATTERN_KEY)


def check_multi_name(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_LENGTH, PATTERN_MULTI_NAME)


def check_path_name(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_PATH_LENGTH, PATTERN_PATH)


def check_method_name(property_name: str, value: Optional[str]) -> None:
    check_property(property_name, value, MAX_LENGTH, PATTERN_METHOD_NAME)


def check_parameter_name(parameters: Optional[Mapping[str, str]]) -> None:
    """Check every entry of a free-form parameter map (value against the symbol rule)."""
    if not parameters:
        return
    for key, value in parameters.items():
        check_name_has_symbol(key, value)


def check_extension(
    kind: str,
    property_name: str,
    value: Optional[str],
    registry: Optional[ExtensionRegistry] = None,
) -> None:
    """Check ``value`` is a valid name and a registered extension of ``kind``."""
    check_name(property_name, value)
    if not value:
        return
    registry = registry or get_extension_registry()
    if not registry.has_extension(kind, value):
        raise NoSuchExtensionError(value, property_name, kind)


def check_multi_extension(
    kind: str,
    property_name: str,
    value: Optional[str],
    registry: Optional[ExtensionRegistry] = None,
) -> None:
    """
    Check a comma-separated list of extension names.

    A token may carry the removal marker (``-echo`` disables ``echo``) and
    the literal ``default`` stands for the built-in chain; both are
    accepted without a registry lookup of the marker or keyword itself.
    """
    check_multi_name(property_name, value)
    if not value:
        return
    registry = registry or get_extension_registry()
    tokens = _MULTI_SPLIT.split(value)
    # trailing separators produce no token
    while tokens and not tokens[-1]:
        tokens.pop()
    for token in tokens:
        if token.startswith(REMOVE_VALUE_PREFIX):
            token = token[1:]
        if token == DEFAULT_KEY:
            continue
        if not token or not registry.has_extension(kind, token):
            raise NoSuchExtensionError(token, property_name, kind)
