"""
Standardized exit codes for dubbo-config CLI commands.

Scripts can distinguish an invalid configuration value (``EXIT_CONFIG_ERROR``)
from any other failure.
"""

from typing import Optional

import typer
from rich.console import Console


# Exit code constants
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

_console = Console(soft_wrap=True)


class CliExit(typer.Exit):
    """
    CLI exit exception with consistent codes.

    Usage:
        raise CliExit.success()
        raise CliExit.config_error("Invalid name=\"a b\"")
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.message = message
        super().__init__(code)
        if message:
            _console.print(message, markup=False, highlight=False)

    @classmethod
    def success(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_SUCCESS, message)

    @classmethod
    def error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_ERROR, message)

    @classmethod
    def config_error(cls, message: Optional[str] = None) -> "CliExit":
        """Create a configuration error exit."""
        return cls(EXIT_CONFIG_ERROR, message)
