import logging
from dataclasses import dataclass, field
from typing import List

import pytest

from dubbo_config.core.config.annotations import append_annotation, convert_annotation_value
from dubbo_config.core.config.registry import get_field
from dubbo_config.core.config.schemas import ConsumerConfig, Reference, ReferenceConfig


class DemoService:
    pass


def test_members_at_declared_default_are_skipped():
    config = ReferenceConfig(timeout=500, check=False)
    config.append_annotation(Reference, Reference(version="1.0.0"))
    assert config.version == "1.0.0"
    assert config.timeout == 500
    assert config.check is False
    assert config.retries is None


def test_filter_sequence_is_joined():
    config = ReferenceConfig()
    append_annotation(config, Reference, Reference(filter=("echo", "trace")))
    assert config.filter == "echo,trace"


def test_parameters_pairs_become_map():
    config = ReferenceConfig()
    append_annotation(config, Reference, Reference(parameters=("weight", "10", "tag", "gray")))
    assert config.parameters == {"weight": "10", "tag": "gray"}


def test_interface_synonyms():
    by_class = ReferenceConfig()
    append_annotation(by_class, Reference, Reference(interface_class=DemoService))
    assert by_class.interface == f"{__name__}.DemoService"

    by_name = ReferenceConfig()
    append_annotation(by_name, Reference, Reference(interface_name="org.example.DemoService"))
    assert by_name.interface == "org.example.DemoService"


def test_non_default_values_override_existing_ones():
    config = ReferenceConfig(retries=5)
    append_annotation(config, Reference, Reference(retries=0, async_=True))
    assert config.retries == 0
    assert config.async_ is True


def test_members_without_target_field_are_ignored():
    config = ConsumerConfig()
    append_annotation(config, Reference, Reference(url="dubbo://127.0.0.1:20880", version="2"))
    assert config.version == "2"
    assert not hasattr(config, "url")


def test_failed_member_is_logged_and_others_imported(caplog):
    config = ReferenceConfig()
    with caplog.at_level(logging.ERROR, logger="dubbo_config"):
        append_annotation(
            config,
            Reference,
            Reference(loadbalance="nosuch", parameters=("odd",), group="g1"),
        )
    assert config.loadbalance is None
    assert config.parameters is None
    assert config.group == "g1"
    assert "[ANNOTATION] Failed to import Reference.loadbalance" in caplog.text
    assert "Failed to import Reference.parameters" in caplog.text


@dataclass(frozen=True)
class Tagged:
    tags: List[str] = field(default_factory=list)
    timeout: int = 0


def test_default_factory_members_are_compared_to_fresh_default():
    config = ConsumerConfig()
    append_annotation(config, Tagged, Tagged(timeout=7))
    assert config.timeout == 7


def test_convert_without_conversion_is_identity():
    meta = get_field(ReferenceConfig, "version")
    assert convert_annotation_value("1.0", meta) == "1.0"


def test_odd_pairs_raise():
    meta = get_field(ReferenceConfig, "parameters")
    with pytest.raises(ValueError):
        convert_annotation_value(["a", "b", "c"], meta)
