"""
Tests for the dubbo-config CLI.
"""

import os

from dubbo_config.cli.exit_codes import EXIT_CONFIG_ERROR
from dubbo_config.cli.main import app


class TestParamsCommand:
    def test_assignments_are_materialized(self, cli_runner):
        result = cli_runner.invoke(
            app,
            ["params", "registry", "--set", "address=zookeeper://127.0.0.1:2181", "--set", "port=2181"],
        )
        assert result.exit_code == 0
        assert "port" in result.stdout
        assert "2181" in result.stdout
        assert "address" not in result.stdout

    def test_values_from_properties_file(self, cli_runner, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("dubbo.protocol.port=20880\ndubbo.protocol.name=dubbo\n", encoding="utf-8")
        result = cli_runner.invoke(app, ["params", "protocol", "--properties", str(path)])
        assert result.exit_code == 0
        assert "20880" in result.stdout
        assert "dubbo" in result.stdout

    def test_scoped_environment_override(self, cli_runner, monkeypatch):
        monkeypatch.setenv("dubbo.protocol.p1.name", "rest")
        result = cli_runner.invoke(app, ["params", "protocol", "--id", "p1"])
        assert result.exit_code == 0
        assert "rest" in result.stdout

    def test_prefix(self, cli_runner):
        result = cli_runner.invoke(app, ["params", "method", "--set", "timeout=100", "--prefix", "sayHello"])
        assert result.exit_code == 0
        assert "sayHello.timeout" in result.stdout

    def test_no_parameters(self, cli_runner):
        result = cli_runner.invoke(app, ["params", "argument"])
        assert result.exit_code == 0
        assert "No parameters" in result.stdout

    def test_invalid_value_exits_with_config_error(self, cli_runner):
        result = cli_runner.invoke(app, ["params", "consumer", "--set", "loadbalance=nosuch"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "No such extension nosuch" in result.stdout

    def test_unknown_kind(self, cli_runner):
        result = cli_runner.invoke(app, ["params", "nope"])
        assert result.exit_code == 2
        assert "Unknown kind" in result.output

    def test_unknown_field(self, cli_runner):
        result = cli_runner.invoke(app, ["params", "registry", "--set", "nosuch=1"])
        assert result.exit_code == 2
        assert "no settable field" in result.output

    def test_dotenv_in_working_directory_is_loaded(self, cli_runner, monkeypatch, tmp_path):
        monkeypatch.setenv("dubbo.registry.group", "placeholder")
        monkeypatch.delenv("dubbo.registry.group")
        (tmp_path / ".env").write_text("dubbo.registry.group=from-dotenv\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(app, ["params", "registry"])
        assert result.exit_code == 0
        assert "from-dotenv" in result.stdout
        assert os.environ["dubbo.registry.group"] == "from-dotenv"


class TestDescribeCommand:
    def test_describe(self, cli_runner):
        result = cli_runner.invoke(
            app, ["describe", "registry", "--set", "address=zookeeper://127.0.0.1:2181"]
        )
        assert result.exit_code == 0
        assert '<dubbo:registry address="zookeeper://127.0.0.1:2181" />' in result.stdout

    def test_invalid_id(self, cli_runner):
        result = cli_runner.invoke(app, ["describe", "registry", "--id", "bad/id"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "contains illegal character" in result.stdout


class TestCheckCommand:
    def test_valid_name(self, cli_runner):
        result = cli_runner.invoke(app, ["check", "name", "abc-DEF.1"])
        assert result.exit_code == 0
        assert "OK" in result.stdout

    def test_invalid_name(self, cli_runner):
        result = cli_runner.invoke(app, ["check", "name", "abc/def"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert 'Invalid name="abc/def" contains illegal character' in result.stdout

    def test_rule_selection(self, cli_runner):
        result = cli_runner.invoke(app, ["check", "path", "/a/b", "--rule", "path"])
        assert result.exit_code == 0

    def test_unknown_rule(self, cli_runner):
        result = cli_runner.invoke(app, ["check", "name", "abc", "--rule", "nope"])
        assert result.exit_code == 2
