"""
Shared pytest fixtures for dubbo-config tests.

Every test runs against a fresh extension registry, an empty persisted
property store and a process environment without ``dubbo.*`` keys, so
results never depend on the machine the suite runs on.
"""

import os
from pathlib import Path
from typing import Callable, Dict

import pytest
from typer.testing import CliRunner

from dubbo_config.core.config.sources import (
    PropertiesFile,
    PropertySource,
    set_properties,
)
from dubbo_config.core.extension import set_extension_registry
from dubbo_config.core.utils.logger import reset_logging


@pytest.fixture(autouse=True)
def isolated_config_state(monkeypatch):
    """Reset process-wide registries and drop ``dubbo.*`` environment keys."""
    for key in list(os.environ):
        if key.startswith("dubbo.") or key.startswith("DUBBO_"):
            monkeypatch.delenv(key, raising=False)
    set_extension_registry(None)
    set_properties(PropertySource({}))
    reset_logging()
    yield
    set_extension_registry(None)
    set_properties(None)
    reset_logging()


@pytest.fixture
def write_properties(tmp_path: Path) -> Callable[[Dict[str, str]], PropertiesFile]:
    """Factory writing a ``dubbo.properties`` file and returning its store."""

    def _write(values: Dict[str, str], name: str = "dubbo.properties") -> PropertiesFile:
        path = tmp_path / name
        lines = [f"{key}={value}" for key, value in values.items()]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return PropertiesFile(path)

    return _write


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual functions/classes")
    config.addinivalue_line("markers", "integration: Tests spanning several engine components")
