"""
Field schema of configuration types.

Each configuration type is a dataclass; its schema (one ``FieldMetadata``
per field, in declaration order) is derived once from the dataclass fields,
their resolved type hints and the options passed to ``config_field`` and
then cached. Every engine component walks this schema instead of
inspecting the instance.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import (
    Any,
    Callable,
    Dict,
    NewType,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from dubbo_config.constants import PROPERTY_ROOT

# Single character value; stored as a one-character ``str``.
Char = NewType("Char", str)

PRIMITIVE_TYPES: Tuple[Any, ...] = (bool, int, float, str, Char)

# Type-name suffixes dropped when deriving a tag (RegistryConfig -> registry)
TAG_SUFFIXES = ("Config", "Bean")

_METADATA_KEY = "dubbo_config"
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class FieldKind(str, Enum):
    PRIMITIVE = "primitive"
    OBJECT = "object"
    MAP = "map"
    LIST = "list"
    OTHER = "other"


class Conversion(str, Enum):
    """Transform applied to an annotation value before it is assigned."""

    NONE = "none"
    JOIN = "join"  # sequence of strings -> "a,b"
    PAIRS_TO_MAP = "pairs_to_map"  # ["k1", "v1", "k2", "v2"] -> {"k1": "v1", "k2": "v2"}


@dataclass(frozen=True)
class FieldMetadata:
    """Metadata describing a config field."""

    name: str
    type: Any
    kind: FieldKind
    property: str
    key: Optional[str] = None
    excluded: bool = False
    required: bool = False
    escaped: bool = False
    append: bool = False
    attribute: bool = False
    extension: bool = False
    conversion: Conversion = Conversion.NONE
    check: Optional[Callable[[str, Any], None]] = None

    @property
    def parameter_key(self) -> str:
        return self.key or self.property

    @property
    def attribute_key(self) -> str:
        return self.key or self.name

    @property
    def display_name(self) -> str:
        """Lower-camel form of the property (``oninvoke.method`` -> ``oninvokeMethod``)."""
        head, *rest = self.property.split(".")
        return head + "".join(part[:1].upper() + part[1:] for part in rest)

    @property
    def is_primitive(self) -> bool:
        return self.kind is FieldKind.PRIMITIVE


def config_field(
    *,
    default: Any = None,
    key: Optional[str] = None,
    excluded: bool = False,
    required: bool = False,
    escaped: bool = False,
    append: bool = False,
    attribute: bool = False,
    extension: bool = False,
    conversion: Conversion = Conversion.NONE,
    check: Optional[Callable[[str, Any], None]] = None,
    kw_only: bool = False,
) -> Any:
    """
    Declare a configuration field with parameter metadata.

    Args:
        key: Parameter key to use instead of the derived property name
        excluded: Never written to the parameter map
        required: Materialization fails when the value is missing
        escaped: Value is URL-encoded in the parameter map
        append: Value is comma-joined after values already present under
                ``default.<key>`` and ``<key>``
        attribute: Field is emitted by the attribute materializer
        extension: Field is a free-form map merged into the parameter map
        conversion: Transform used when importing the value from an annotation
        check: Validator called as ``check(field_name, value)`` on assignment
        kw_only: Keyword-only in the generated ``__init__``
    """
    options = {
        "key": key,
        "excluded": excluded,
        "required": required,
        "escaped": escaped,
        "append": append,
        "attribute": attribute,
        "extension": extension,
        "conversion": conversion,
        "check": check,
    }
    extra = {"kw_only": True} if kw_only else {}
    return dataclasses.field(default=default, metadata={_METADATA_KEY: options}, **extra)


def camel_to_split_name(name: str, separator: str = ".") -> str:
    """``requestTimeout`` / ``request_timeout`` -> ``request.timeout``."""
    if not name:
        return name
    name = _CAMEL_BOUNDARY.sub("_", name).lower()
    return separator.join(part for part in name.split("_") if part)


def tag_of(config_type: type) -> str:
    """Lower-cased type name with a well-known suffix removed."""
    tag = config_type.__name__
    for suffix in TAG_SUFFIXES:
        if tag.endswith(suffix):
            tag = tag[: -len(suffix)]
            break
    return tag.lower()


def property_prefix(config_type: type) -> str:
    return f"{PROPERTY_ROOT}.{tag_of(config_type)}."


def _unwrap_optional(tp: Any) -> Any:
    if get_origin(tp) is Union:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _infer_kind(tp: Any) -> FieldKind:
    if tp in PRIMITIVE_TYPES:
        return FieldKind.PRIMITIVE
    if tp is Any or tp is object:
        return FieldKind.OBJECT
    origin = get_origin(tp) or tp
    if origin in (dict, Dict):
        return FieldKind.MAP
    if origin in (list, tuple):
        return FieldKind.LIST
    return FieldKind.OTHER


@lru_cache(maxsize=None)
def build_registry(config_type: type) -> Tuple[FieldMetadata, ...]:
    """Build (once) the ordered field schema of a configuration dataclass."""
    if not dataclasses.is_dataclass(config_type):
        raise TypeError(f"{config_type.__name__} is not a configuration dataclass")
    hints = get_type_hints(config_type)
    schema = []
    for f in dataclasses.fields(config_type):
        if f.name.startswith("_"):
            continue
        tp = _unwrap_optional(hints.get(f.name, Any))
        options = dict(f.metadata.get(_METADATA_KEY, {}))
        schema.append(
            FieldMetadata(
                name=f.name,
                type=tp,
                kind=_infer_kind(tp),
                property=camel_to_split_name(f.name),
                **options,
            )
        )
    return tuple(schema)


@lru_cache(maxsize=None)
def _fields_by_name(config_type: type) -> Dict[str, FieldMetadata]:
    return {meta.name: meta for meta in build_registry(config_type)}


def get_field(config_type: type, name: str) -> Optional[FieldMetadata]:
    return _fields_by_name(config_type).get(name)
