"""
dubbo-config - configuration resolution for dubbo services

Typed configuration objects (registry, protocol, method, reference, ...)
that are filled in from environment overrides and persisted property files
and then flattened into the parameter map of a service address.

Package Structure:
- core/config/: configuration engine (schemas, resolver, materializers)
- core/extension.py: registry of named extensions per capability
- core/utils/: logging helpers
- cli/: ``dubbo-config`` command-line interface
"""

__version__ = "0.1.0"

from .core.config import (
    AbstractConfig,
    ArgumentConfig,
    ConfigError,
    ConsumerConfig,
    MethodConfig,
    ProtocolConfig,
    Reference,
    ReferenceConfig,
    RegistryConfig,
    config_field,
)

__all__ = [
    "__version__",
    "AbstractConfig",
    "ArgumentConfig",
    "ConfigError",
    "ConsumerConfig",
    "MethodConfig",
    "ProtocolConfig",
    "Reference",
    "ReferenceConfig",
    "RegistryConfig",
    "config_field",
]
