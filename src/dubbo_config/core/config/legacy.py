"""Translation of current property keys to the keys used by older releases."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

LEGACY_RETRIES_KEY = "dubbo.service.max.retry.providers"
LEGACY_ALLOW_NO_PROVIDER_KEY = "dubbo.service.allow.no.provider"

# current key -> legacy key
LEGACY_PROPERTIES: Mapping[str, str] = MappingProxyType(
    {
        "dubbo.protocol.name": "dubbo.service.protocol",
        "dubbo.protocol.host": "dubbo.service.server.host",
        "dubbo.protocol.port": "dubbo.service.server.port",
        "dubbo.protocol.threads": "dubbo.service.max.thread.pool.size",
        "dubbo.consumer.timeout": "dubbo.service.invoke.timeout",
        "dubbo.consumer.retries": LEGACY_RETRIES_KEY,
        "dubbo.consumer.check": LEGACY_ALLOW_NO_PROVIDER_KEY,
        "dubbo.service.url": "dubbo.service.address",
    }
)


def legacy_key_for(key: str) -> Optional[str]:
    return LEGACY_PROPERTIES.get(key)


def convert_legacy_value(legacy_key: str, value: Optional[str]) -> Optional[str]:
    """
    Convert a value stored under ``legacy_key`` to the current semantics.

    Old releases stored the number of *extra* providers to try (retries - 1)
    and "allow no provider" (the negation of ``check``).
    """
    if not value:
        return value
    if legacy_key == LEGACY_RETRIES_KEY:
        return str(int(value.strip()) + 1)
    if legacy_key == LEGACY_ALLOW_NO_PROVIDER_KEY:
        return "false" if value.strip().lower() == "true" else "true"
    return value
