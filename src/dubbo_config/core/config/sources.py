"""
Key/value sources consulted by the property resolver.

Two sources exist:

- ``EnvironmentOverrides``: process-level overrides, looked up by exact
  key (``dubbo.registry.address``) in ``os.environ`` or a given mapping.
- ``PropertiesFile``: the persisted ``dubbo.properties`` store, parsed with
  python-dotenv (``key=value`` lines, ``#`` comments, ``${VAR}``
  interpolation from the environment).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional, Union

from dotenv import dotenv_values

from dubbo_config.constants import (
    DEFAULT_PROPERTIES_FILE,
    PROPERTIES_FILE_ENV,
    PROPERTIES_FILE_KEY,
)
from dubbo_config.core.utils.logger import log_debug


class PropertySource:
    """Read-only ``key -> string`` lookup over a mapping."""

    label = "property"

    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None) -> None:
        self._values: Mapping[str, Optional[str]] = values if values is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._values)} keys)"


class EnvironmentOverrides(PropertySource):
    """Overrides taken from the process environment (live view by default)."""

    label = "environment override"

    def __init__(self, values: Optional[MutableMapping[str, str]] = None) -> None:
        super().__init__(os.environ if values is None else values)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value  # type: ignore[index]


def resolve_properties_path(environment: Optional[Mapping[str, str]] = None) -> Path:
    """Location of the persisted property file."""
    environment = os.environ if environment is None else environment
    path = environment.get(PROPERTIES_FILE_KEY) or environment.get(PROPERTIES_FILE_ENV)
    return Path(path or DEFAULT_PROPERTIES_FILE)


class PropertiesFile(PropertySource):
    """Persisted properties, loaded on first lookup."""

    label = "property file"

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        super().__init__()
        self.path = Path(path) if path is not None else None
        self._loaded = False

    def get(self, key: str) -> Optional[str]:
        if not self._loaded:
            self.reload()
        return super().get(key)

    def __contains__(self, key: object) -> bool:
        if not self._loaded:
            self.reload()
        return super().__contains__(key)

    def reload(self) -> None:
        path = self.path or resolve_properties_path()
        values: Dict[str, Optional[str]] = {}
        if path.is_file():
            values = dict(dotenv_values(dotenv_path=path, interpolate=True))
            log_debug("PROPERTIES", f"Loaded {len(values)} properties", str(path))
        else:
            log_debug("PROPERTIES", "No property file found", str(path))
        self._values = values
        self._loaded = True


_environment: Optional[EnvironmentOverrides] = None
_properties: Optional[PropertySource] = None


def get_environment() -> EnvironmentOverrides:
    """Get the process-wide environment override source."""
    global _environment
    if _environment is None:
        _environment = EnvironmentOverrides()
    return _environment


def get_properties() -> PropertySource:
    """Get the process-wide persisted property store."""
    global _properties
    if _properties is None:
        _properties = PropertiesFile()
    return _properties


def set_properties(properties: Optional[PropertySource]) -> None:
    """Replace the process-wide property store (``None`` resets it)."""
    global _properties
    _properties = properties
