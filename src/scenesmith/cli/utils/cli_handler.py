"""Unified CLI handler for standardized error handling and output."""

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from scenesmith.cli.formatters.json_formatter import JsonFormatter
from scenesmith.config import get_logger
from scenesmith.exceptions import ScenesmithError, ValidationError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Display an error and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always, with ``exit_code``
        """
        logger.error(
            "Command failed", error=str(error), error_type=type(error).__name__
        )

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, ScenesmithError):
            # format_error already carries the "Error:" prefix and hints
            label = "Validation " if isinstance(error, ValidationError) else ""
            self.console.print(f"[red]{label}{escape(error.format_error())}[/red]")
        else:
            self.console.print(f"[red]Error: {escape(str(error))}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Display a success message.

        Args:
            message: Success message
            data: Optional data to include in JSON output
            json_output: Whether to output JSON
        """
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{escape(message)}[/green]")
