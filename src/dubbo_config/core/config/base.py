"""Base class of every configuration type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .annotations import append_annotation
from .descriptor import render_descriptor
from .parameters import materialize, materialize_attributes
from .registry import config_field, get_field, tag_of
from .resolver import append_properties
from .sources import PropertySource
from .validation import check_name


@dataclass
class AbstractConfig:
    """
    Configuration record whose fields start out unset (``None``).

    Assigning a field runs the validator declared for it in the schema, so
    an invalid value is rejected whether it comes from application code, an
    annotation or a resolved property.

    The optional ``id`` distinguishes several instances of the same kind and
    scopes their override keys (``dubbo.<tag>.<id>.<property>``).
    """

    id: Optional[str] = config_field(excluded=True, check=check_name, kw_only=True)

    def __setattr__(self, name: str, value: Any) -> None:
        field_meta = get_field(type(self), name)
        if field_meta is not None and field_meta.check is not None and value is not None:
            field_meta.check(name, value)
        super().__setattr__(name, value)

    @classmethod
    def tag(cls) -> str:
        return tag_of(cls)

    def append_properties(
        self,
        environment: Optional[PropertySource] = None,
        properties: Optional[PropertySource] = None,
    ) -> None:
        """Fill unset fields from environment overrides and persisted properties."""
        append_properties(self, environment, properties)

    def append_annotation(self, annotation_type: type, annotation: Any) -> None:
        append_annotation(self, annotation_type, annotation)

    def to_parameters(self, prefix: Optional[str] = None) -> Dict[str, str]:
        return materialize(self, prefix)

    def to_attributes(self, prefix: Optional[str] = None) -> Dict[str, Any]:
        return materialize_attributes(self, prefix)

    def __str__(self) -> str:
        return render_descriptor(self)
