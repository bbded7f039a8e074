"""
Concrete configuration schemas.

Only the field declarations live here; resolution, materialization and
rendering are shared through ``AbstractConfig``. Field names follow the
property names (``async_`` -> ``async``, ``return_`` -> ``return``).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from dubbo_config.constants import (
    INVOKER_LISTENER_KEY,
    ON_INVOKE_INSTANCE_KEY,
    ON_INVOKE_METHOD_KEY,
    ON_RETURN_INSTANCE_KEY,
    ON_RETURN_METHOD_KEY,
    ON_THROW_INSTANCE_KEY,
    ON_THROW_METHOD_KEY,
    REFERENCE_FILTER_KEY,
    SHUTDOWN_WAIT_KEY,
)

from .base import AbstractConfig
from .registry import Conversion, config_field
from .sources import get_environment
from .validation import (
    check_extension,
    check_key,
    check_length,
    check_method_name,
    check_multi_extension,
    check_name,
    check_parameter_name,
    check_path_length,
    check_path_name,
)


def _check_parameters(_: str, value: Dict[str, str]) -> None:
    check_parameter_name(value)


@dataclass
class AbstractMethodConfig(AbstractConfig):
    """Invocation settings shared by methods, references and consumers."""

    timeout: Optional[int] = None
    retries: Optional[int] = None
    actives: Optional[int] = None
    loadbalance: Optional[str] = config_field(check=partial(check_extension, "loadbalance"))
    async_: Optional[bool] = None
    sent: Optional[bool] = None
    mock: Optional[str] = config_field(escaped=True)
    merger: Optional[str] = None
    cache: Optional[str] = None
    validation: Optional[str] = None
    parameters: Optional[Dict[str, str]] = config_field(
        extension=True,
        conversion=Conversion.PAIRS_TO_MAP,
        check=_check_parameters,
    )


@dataclass
class ArgumentConfig(AbstractConfig):
    index: Optional[int] = config_field(excluded=True)
    type: Optional[str] = config_field(excluded=True)
    callback: Optional[bool] = None


@dataclass
class MethodConfig(AbstractMethodConfig):
    """
    Per-method overrides of a service or reference.

    The method name doubles as the ``id`` when none is given, so per-method
    overrides are looked up as ``dubbo.method.<name>.<property>``.
    """

    name: Optional[str] = config_field(excluded=True, check=check_method_name)
    stat: Optional[int] = None
    retry: Optional[bool] = None
    reliable: Optional[bool] = None
    executes: Optional[int] = None
    deprecated: Optional[bool] = None
    sticky: Optional[bool] = None
    return_: Optional[bool] = None
    oninvoke: Optional[Any] = config_field(excluded=True, attribute=True, key=ON_INVOKE_INSTANCE_KEY)
    oninvoke_method: Optional[str] = config_field(
        excluded=True, attribute=True, key=ON_INVOKE_METHOD_KEY
    )
    onreturn: Optional[Any] = config_field(excluded=True, attribute=True, key=ON_RETURN_INSTANCE_KEY)
    onreturn_method: Optional[str] = config_field(
        excluded=True, attribute=True, key=ON_RETURN_METHOD_KEY
    )
    onthrow: Optional[Any] = config_field(excluded=True, attribute=True, key=ON_THROW_INSTANCE_KEY)
    onthrow_method: Optional[str] = config_field(
        excluded=True, attribute=True, key=ON_THROW_METHOD_KEY
    )
    arguments: Optional[List[ArgumentConfig]] = None

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name == "name" and value and not getattr(self, "id", None):
            self.id = value


@dataclass
class RegistryConfig(AbstractConfig):
    """Registry center connection settings."""

    NO_AVAILABLE: ClassVar[str] = "N/A"

    address: Optional[str] = config_field(excluded=True)
    protocol: Optional[str] = config_field(check=check_name)
    username: Optional[str] = config_field(check=check_name)
    password: Optional[str] = config_field(check=check_length)
    port: Optional[int] = None
    transporter: Optional[str] = config_field(check=check_name)
    server: Optional[str] = config_field(check=check_name)
    client: Optional[str] = config_field(check=check_name)
    cluster: Optional[str] = None
    group: Optional[str] = None
    version: Optional[str] = None
    timeout: Optional[int] = None
    session: Optional[int] = None
    file: Optional[str] = config_field(check=check_path_length)
    wait: Optional[int] = None
    check: Optional[bool] = None
    dynamic: Optional[bool] = None
    register: Optional[bool] = None
    subscribe: Optional[bool] = None
    parameters: Optional[Dict[str, str]] = config_field(
        extension=True,
        conversion=Conversion.PAIRS_TO_MAP,
        check=_check_parameters,
    )
    default: Optional[bool] = None

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name == "wait" and value is not None and value > 0:
            get_environment().set(SHUTDOWN_WAIT_KEY, str(value))

    @property
    def transport(self) -> Optional[str]:
        """Deprecated alias of ``transporter``."""
        return self.transporter

    @transport.setter
    def transport(self, value: Optional[str]) -> None:
        self.transporter = value


@dataclass
class ProtocolConfig(AbstractConfig):
    name: Optional[str] = config_field(check=check_name)
    host: Optional[str] = config_field(check=check_name)
    port: Optional[int] = None
    threads: Optional[int] = None
    iothreads: Optional[int] = None
    contextpath: Optional[str] = config_field(check=check_path_name)
    server: Optional[str] = config_field(check=check_name)
    client: Optional[str] = config_field(check=check_name)
    serialization: Optional[str] = config_field(check=check_name)
    charset: Optional[str] = None
    parameters: Optional[Dict[str, str]] = config_field(
        extension=True,
        conversion=Conversion.PAIRS_TO_MAP,
        check=_check_parameters,
    )
    default: Optional[bool] = None


@dataclass
class AbstractReferenceConfig(AbstractMethodConfig):
    check: Optional[bool] = None
    init: Optional[bool] = None
    generic: Optional[bool] = None
    version: Optional[str] = config_field(check=check_key)
    group: Optional[str] = config_field(check=check_key)
    cluster: Optional[str] = config_field(check=partial(check_extension, "cluster"))
    filter: Optional[str] = config_field(
        key=REFERENCE_FILTER_KEY,
        append=True,
        conversion=Conversion.JOIN,
        check=partial(check_multi_extension, "filter"),
    )
    listener: Optional[str] = config_field(
        key=INVOKER_LISTENER_KEY,
        append=True,
        conversion=Conversion.JOIN,
        check=partial(check_multi_extension, "listener"),
    )


@dataclass
class ConsumerConfig(AbstractReferenceConfig):
    default: Optional[bool] = None
    client: Optional[str] = config_field(check=check_name)


@dataclass
class ReferenceConfig(AbstractReferenceConfig):
    interface: Optional[str] = None
    url: Optional[str] = config_field(excluded=True)
    methods: Optional[List[MethodConfig]] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "interface" and isinstance(value, type):
            value = f"{value.__module__}.{value.__qualname__}"
        super().__setattr__(name, value)


@dataclass(frozen=True)
class Reference:
    """Declarative reference settings; members left at their default are ignored."""

    interface_class: Optional[type] = None
    interface_name: str = ""
    version: str = ""
    group: str = ""
    url: str = ""
    check: bool = True
    init: bool = False
    timeout: int = 0
    retries: int = 2
    loadbalance: str = ""
    async_: bool = False
    sent: bool = False
    mock: str = ""
    cache: str = ""
    validation: str = ""
    filter: Tuple[str, ...] = ()
    listener: Tuple[str, ...] = ()
    parameters: Tuple[str, ...] = ()


CONFIG_TYPES: Dict[str, type] = {
    cls.tag(): cls
    for cls in (
        ArgumentConfig,
        MethodConfig,
        RegistryConfig,
        ProtocolConfig,
        ConsumerConfig,
        ReferenceConfig,
    )
}
