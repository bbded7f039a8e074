from dataclasses import dataclass
from typing import Any, Dict, Optional

import pytest

from dubbo_config.core.config.base import AbstractConfig
from dubbo_config.core.config.coercion import convert_primitive
from dubbo_config.core.config.errors import ConfigError, MissingRequiredParameterError
from dubbo_config.core.config.parameters import (
    append_attributes,
    append_parameters,
    materialize,
    materialize_attributes,
)
from dubbo_config.core.config.registry import build_registry, config_field
from dubbo_config.core.config.schemas import (
    ConsumerConfig,
    MethodConfig,
    ProtocolConfig,
    ReferenceConfig,
    RegistryConfig,
)


@dataclass
class ServiceBean(AbstractConfig):
    interface: Optional[str] = config_field(required=True)
    group: Optional[str] = config_field(append=True)
    token: Optional[str] = config_field(escaped=True)
    weight: Optional[int] = None


def test_required_field_missing_names_the_field():
    with pytest.raises(MissingRequiredParameterError) as excinfo:
        materialize(ServiceBean())
    assert str(excinfo.value) == "ServiceBean.interface == null"


def test_required_field_present_materializes():
    config = ServiceBean()
    config.interface = "org.example.DemoService"
    assert materialize(config) == {"interface": "org.example.DemoService"}


def test_required_field_empty_string_is_missing():
    with pytest.raises(MissingRequiredParameterError):
        materialize(ServiceBean(interface=""))


def test_append_merges_with_default_and_current_values():
    parameters = {"default.group": "A", "group": "B"}
    append_parameters(parameters, ServiceBean(interface="x", group="C"))
    assert parameters["group"] == "A,B,C"


def test_append_without_prior_values():
    parameters = append_parameters({}, ServiceBean(interface="x", group="C"))
    assert parameters["group"] == "C"


def test_escaped_values_are_url_encoded():
    parameters = materialize(ServiceBean(interface="x", token="a b&c=d"))
    assert parameters["token"] == "a+b%26c%3Dd"


def test_prefix_is_joined_with_dot():
    parameters = materialize(ServiceBean(interface="x", weight=5), prefix="sayHello")
    assert parameters == {"sayHello.interface": "x", "sayHello.weight": "5"}


def test_unset_and_excluded_fields_are_skipped():
    config = RegistryConfig("zookeeper://127.0.0.1:2181", protocol="zookeeper", id="r1")
    assert materialize(config) == {"protocol": "zookeeper"}


def test_booleans_and_property_names():
    config = ConsumerConfig(async_=True, sent=False, timeout=1000)
    assert materialize(config) == {"async": "true", "sent": "false", "timeout": "1000"}


def test_custom_keys_and_extension_map():
    config = ReferenceConfig(
        filter="echo,-trace",
        listener="deprecated",
        parameters={"router-rule": "gray", "weight": "10"},
    )
    assert materialize(config) == {
        "reference.filter": "echo,-trace",
        "invoker.listener": "deprecated",
        "router.rule": "gray",
        "weight": "10",
    }


def test_extension_map_gets_prefix():
    config = ProtocolConfig(name="dubbo", parameters={"a-b": "1"})
    assert materialize(config, prefix="p") == {"p.name": "dubbo", "p.a.b": "1"}


def test_collections_and_objects_are_not_parameters():
    method = MethodConfig(name="sayHello", timeout=100, oninvoke=object(), oninvoke_method="before")
    assert materialize(method) == {"timeout": "100"}
    reference = ReferenceConfig(interface="org.example.Demo", methods=[method])
    assert materialize(reference) == {"interface": "org.example.Demo"}


def test_none_config_leaves_map_untouched():
    parameters = {"k": "v"}
    assert append_parameters(parameters, None) is parameters
    assert parameters == {"k": "v"}


@dataclass
class BrokenBean(AbstractConfig):
    timeout: Optional[int] = None

    def __getattribute__(self, name):
        if name == "timeout":
            raise RuntimeError("unreadable")
        return super().__getattribute__(name)


def test_foreign_failures_are_wrapped():
    with pytest.raises(ConfigError) as excinfo:
        materialize(BrokenBean())
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_round_trip_reproduces_primitive_values():
    config = RegistryConfig(
        "zookeeper://127.0.0.1:2181",
        protocol="zookeeper",
        username="admin",
        port=2181,
        timeout=5000,
        file="/tmp/registry.cache",
        check=False,
        dynamic=True,
        group="dev",
    )
    parameters = materialize(config)

    restored = RegistryConfig()
    for meta in build_registry(RegistryConfig):
        if meta.parameter_key in parameters:
            setattr(restored, meta.name, convert_primitive(parameters[meta.parameter_key], meta))

    for meta in build_registry(RegistryConfig):
        if meta.is_primitive and not meta.excluded:
            assert getattr(restored, meta.name) == getattr(config, meta.name)


def test_attributes_of_callbacks():
    handler = object()
    method = MethodConfig(name="sayHello", onreturn=handler, onreturn_method="after", timeout=10)
    assert materialize_attributes(method) == {
        "onreturn.instance": handler,
        "onreturn.method": "after",
    }


def test_attributes_with_prefix_and_accumulation():
    first = MethodConfig(name="a", onthrow_method="failed")
    second = MethodConfig(name="b", oninvoke_method="called")
    attributes: Dict[str, Any] = {}
    append_attributes(attributes, first, prefix="a")
    append_attributes(attributes, second, prefix="b")
    assert attributes == {"a.onthrow.method": "failed", "b.oninvoke.method": "called"}


def test_config_methods_delegate_to_materializers():
    config = ProtocolConfig(name="dubbo", port=20880)
    assert config.to_parameters() == {"name": "dubbo", "port": "20880"}
    assert config.to_attributes() == {}


def test_extension_entries_are_merged_last_and_win():
    config = ReferenceConfig(
        parameters={"version": "from-map"},
        version="1.0.0",
        timeout=100,
    )
    parameters = materialize(config)
    assert parameters["version"] == "from-map"


def test_append_skips_missing_prior_values():
    parameters = append_parameters({"default.group": "A"}, ServiceBean(interface="x", group="C"))
    assert parameters["group"] == "A,C"


def test_escaping_keeps_star_and_encodes_tilde():
    parameters = materialize(ServiceBean(interface="x", token="a*b~c"))
    assert parameters["token"] == "a*b%7Ec"


def test_method_retry_and_reliable_are_parameters():
    method = MethodConfig(name="sayHello", retry=False, reliable=True)
    assert materialize(method) == {"retry": "false", "reliable": "true"}
