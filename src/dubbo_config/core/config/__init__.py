"""
Configuration engine.

Data flows one way through this package: values set by the application
and imported from annotations (``annotations``) are completed from
environment overrides and persisted properties (``resolver``), then
flattened into parameter and attribute maps (``parameters``). Every step
walks the cached field schema built by ``registry``.
"""

from .annotations import append_annotation
from .base import AbstractConfig
from .descriptor import render_descriptor
from .errors import (
    ConfigError,
    MissingRequiredParameterError,
    NoSuchExtensionError,
    PropertyValidationError,
)
from .parameters import (
    append_attributes,
    append_parameters,
    materialize,
    materialize_attributes,
)
from .registry import Char, Conversion, FieldKind, FieldMetadata, build_registry, config_field
from .resolver import append_properties
from .schemas import (
    CONFIG_TYPES,
    AbstractMethodConfig,
    AbstractReferenceConfig,
    ArgumentConfig,
    ConsumerConfig,
    MethodConfig,
    ProtocolConfig,
    Reference,
    ReferenceConfig,
    RegistryConfig,
)

__all__ = [
    "AbstractConfig",
    "AbstractMethodConfig",
    "AbstractReferenceConfig",
    "ArgumentConfig",
    "CONFIG_TYPES",
    "Char",
    "ConfigError",
    "ConsumerConfig",
    "Conversion",
    "FieldKind",
    "FieldMetadata",
    "MethodConfig",
    "MissingRequiredParameterError",
    "NoSuchExtensionError",
    "PropertyValidationError",
    "ProtocolConfig",
    "Reference",
    "ReferenceConfig",
    "RegistryConfig",
    "append_annotation",
    "append_attributes",
    "append_parameters",
    "append_properties",
    "build_registry",
    "config_field",
    "materialize",
    "materialize_attributes",
    "render_descriptor",
]
