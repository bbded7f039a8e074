"""Exception hierarchy of the configuration engine."""

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Base class for every configuration failure.

    Strict operations (materialization, validation, extension checks) raise
    subclasses of this error; foreign exceptions met on those paths are
    wrapped in a plain ``ConfigError``.
    """


class PropertyValidationError(ConfigError):
    """A value failed a length or character-class check."""

    def __init__(
        self,
        property_name: str,
        value: str,
        max_length: Optional[int] = None,
        pattern: Optional[str] = None,
    ) -> None:
        self.property_name = property_name
        self.value = value
        self.max_length = max_length
        self.pattern = pattern
        if pattern is None:
            message = f'Invalid {property_name}="{value}" is longer than {max_length}'
        else:
            message = (
                f'Invalid {property_name}="{value}" contains illegal character, '
                f"only characters matching {pattern} are legal."
            )
        super().__init__(message)


class MissingRequiredParameterError(ConfigError):
    """A field marked required had no value when the parameter map was built."""

    def __init__(self, owner: str, key: str) -> None:
        self.owner = owner
        self.key = key
        super().__init__(f"{owner}.{key} == null")


class NoSuchExtensionError(ConfigError):
    """A named extension is not registered for the requested capability."""

    def __init__(self, name: str, property_name: str, kind: str) -> None:
        self.name = name
        self.property_name = property_name
        self.kind = kind
        super().__init__(f"No such extension {name} for {property_name}/{kind}")
