"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from scenesmith import __version__
from scenesmith.cli.commands import (
    characters_command,
    enrich_command,
    evidence_command,
    scenes_command,
    tokens_command,
)
from scenesmith.cli.formatters.json_formatter import JsonFormatter
from scenesmith.cli.utils.cli_handler import CLIHandler
from scenesmith.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)
from scenesmith.exceptions import ConfigurationError

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scenesmith",
    help="Fountain screenplay structure and character enrichment",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="scenes")(scenes_command)
app.command(name="characters")(characters_command)
app.command(name="tokens")(tokens_command)
app.command(name="evidence")(evidence_command)
app.command(name="enrich")(enrich_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show SceneSmith version."""
    version_info = {
        "name": "SceneSmith",
        "version": __version__,
        "description": "Fountain screenplay structure and character enrichment",
    }

    if json_output:
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"SceneSmith v{version_info['version']}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="SCENESMITH_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, Any] = {}
    if debug:
        overrides.update(debug=True, log_level="DEBUG")
    elif verbose:
        overrides["log_level"] = "INFO"

    if config is None and not overrides:
        return

    handler = CLIHandler(console)
    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except FileNotFoundError:
        handler.handle_error(
            ConfigurationError(
                message=f"Config file not found: {config}",
                hint="Check the --config path",
                details={"config_file": str(config)},
            )
        )
        return
    except PydanticValidationError as e:
        handler.handle_error(
            ConfigurationError(
                message="Invalid configuration values",
                hint="Check the values in your config file and environment",
                details={"errors": e.error_count()},
            )
        )
        return
    except ConfigurationError as e:
        handler.handle_error(e)
        return

    set_settings(settings)
    configure_logging(settings)
    logger.debug("Settings loaded", config_file=str(config) if config else None)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
