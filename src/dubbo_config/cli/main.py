"""
Typer-based CLI for dubbo-config.

Inspect how a configuration kind resolves in the current environment:

- ``params``: resolved parameter map, as it would be embedded in a service address
- ``describe``: tag-style descriptor of the resolved configuration
- ``check``: run one of the value validators against a value

Overrides are read from the process environment (``dubbo.<tag>.<property>``)
and from the persisted property file (``dubbo.properties`` or ``--properties``).
A ``.env`` file in the working directory is loaded first without overriding
variables that are already set.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from dubbo_config.core.config import validation
from dubbo_config.core.config.base import AbstractConfig
from dubbo_config.core.config.coercion import convert_primitive
from dubbo_config.core.config.errors import ConfigError
from dubbo_config.core.config.parameters import materialize
from dubbo_config.core.config.registry import get_field
from dubbo_config.core.config.schemas import CONFIG_TYPES
from dubbo_config.core.config.sources import PropertiesFile
from dubbo_config.core.utils.logger import setup_logging

from .exit_codes import CliExit

console = Console(soft_wrap=True)
app = typer.Typer(
    name="dubbo-config",
    help="Resolve and inspect dubbo configuration objects",
    add_completion=False,
    no_args_is_help=True,
)

RULES: Dict[str, Callable[[str, Optional[str]], None]] = {
    "name": validation.check_name,
    "multi-name": validation.check_multi_name,
    "method": validation.check_method_name,
    "path": validation.check_path_name,
    "symbol": validation.check_name_has_symbol,
    "key": validation.check_key,
    "length": validation.check_length,
}


def _parse_assignments(assignments: Optional[List[str]]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    if not assignments:
        return parsed
    for raw in assignments:
        if "=" not in raw:
            raise typer.BadParameter(f"Invalid assignment '{raw}'. Use field=value format.")
        name, value = raw.split("=", 1)
        parsed[name.strip()] = value.strip()
    return parsed


def _build_config(
    kind: str,
    config_id: Optional[str],
    assignments: Optional[List[str]],
    properties_file: Optional[Path],
) -> AbstractConfig:
    config_type = CONFIG_TYPES.get(kind.lower())
    if config_type is None:
        raise typer.BadParameter(
            f"Unknown kind '{kind}'. Choose from: {', '.join(sorted(CONFIG_TYPES))}"
        )
    try:
        config = config_type(id=config_id)
        for name, raw in _parse_assignments(assignments).items():
            field_meta = get_field(config_type, name)
            if field_meta is None or not field_meta.is_primitive:
                raise typer.BadParameter(f"{kind} has no settable field '{name}'")
            try:
                value = convert_primitive(raw, field_meta)
            except ValueError as exc:
                raise typer.BadParameter(f"{name}: {exc}") from exc
            setattr(config, name, value)
        properties = PropertiesFile(properties_file) if properties_file else None
        config.append_properties(properties=properties)
    except ConfigError as exc:
        raise CliExit.config_error(str(exc)) from exc
    return config


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    setup_logging(level=log_level)


@app.command("params")
def params(
    kind: str = typer.Argument(..., help="Configuration kind, e.g. registry, method, reference"),
    config_id: Optional[str] = typer.Option(None, "--id", help="Instance id scoping the lookups"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Prefix joined to every key"),
    properties_file: Optional[Path] = typer.Option(
        None, "--properties", help="Property file to use instead of dubbo.properties"
    ),
    assignments: Optional[List[str]] = typer.Option(
        None, "--set", "-s", help="Field assignment applied before resolution (field=value)"
    ),
) -> None:
    """Show the resolved parameter map of a configuration kind."""
    config = _build_config(kind, config_id, assignments, properties_file)
    try:
        parameters = materialize(config, prefix)
    except ConfigError as exc:
        raise CliExit.config_error(str(exc)) from exc

    if not parameters:
        console.print("[yellow]No parameters[/yellow]")
        return
    table = Table(title=f"{config.tag()} parameters")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key in sorted(parameters):
        table.add_row(key, parameters[key])
    console.print(table)


@app.command("describe")
def describe(
    kind: str = typer.Argument(..., help="Configuration kind"),
    config_id: Optional[str] = typer.Option(None, "--id", help="Instance id scoping the lookups"),
    properties_file: Optional[Path] = typer.Option(
        None, "--properties", help="Property file to use instead of dubbo.properties"
    ),
    assignments: Optional[List[str]] = typer.Option(
        None, "--set", "-s", help="Field assignment applied before resolution (field=value)"
    ),
) -> None:
    """Print the descriptor of the resolved configuration."""
    config = _build_config(kind, config_id, assignments, properties_file)
    console.print(str(config), markup=False, highlight=False)


@app.command("check")
def check(
    name: str = typer.Argument(..., help="Property name used in the error message"),
    value: str = typer.Argument(..., help="Value to validate"),
    rule: str = typer.Option("name", "--rule", "-r", help=f"One of: {', '.join(RULES)}"),
) -> None:
    """Validate a value with one of the built-in rules."""
    checker = RULES.get(rule)
    if checker is None:
        raise typer.BadParameter(f"Unknown rule '{rule}'. Choose from: {', '.join(RULES)}")
    try:
        checker(name, value)
    except ConfigError as exc:
        raise CliExit.config_error(str(exc)) from exc
    console.print(f"[green]OK[/green] {name}", highlight=False)


if __name__ == "__main__":
    app()
