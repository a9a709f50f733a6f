"""Commands that inspect the structure of a Fountain screenplay."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scenesmith.cli.formatters.json_formatter import JsonFormatter
from scenesmith.cli.formatters.table_formatter import (
    format_character_table,
    format_scene_table,
)
from scenesmith.cli.utils.cli_handler import CLIHandler
from scenesmith.config import get_settings
from scenesmith.exceptions import check_file_path
from scenesmith.parser import (
    FountainParser,
    FountainTokenizer,
    character_scene_counts,
)
from scenesmith.parser.fountain_parser import read_fountain_file

console = Console()

FountainFile = Annotated[Path, typer.Argument(help="Path to the Fountain file")]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def scenes_command(script: FountainFile, json_output: JsonOption = False) -> None:
    """List the scenes of a screenplay in order."""
    handler = CLIHandler(console)
    try:
        check_file_path(script, kind="screenplay")
        screenplay = FountainParser(get_settings().cue_rules()).parse_file(script)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(
            JsonFormatter().format(
                {
                    "title": screenplay.title,
                    "author": screenplay.author,
                    "scenes": screenplay.scenes,
                }
            )
        )
        return

    if not screenplay.scenes:
        console.print("[yellow]No scenes found.[/yellow]")
        return
    console.print(format_scene_table(screenplay.scenes, title=screenplay.title))


def characters_command(script: FountainFile, json_output: JsonOption = False) -> None:
    """List speaking characters with the number of scenes they speak in."""
    handler = CLIHandler(console)
    try:
        check_file_path(script, kind="screenplay")
        screenplay = FountainParser(get_settings().cue_rules()).parse_file(script)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    counts = character_scene_counts(screenplay.scenes)
    rows = [(name, counts.get(name, 0)) for name in screenplay.characters]

    if json_output:
        print(JsonFormatter().format([{"name": n, "scenes": c} for n, c in rows]))
        return

    if not rows:
        console.print("[yellow]No characters found.[/yellow]")
        return
    console.print(format_character_table(rows))


def tokens_command(script: FountainFile, json_output: JsonOption = False) -> None:
    """Dump the classified token stream of a screenplay."""
    handler = CLIHandler(console)
    try:
        check_file_path(script, kind="screenplay")
        content = read_fountain_file(script)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    tokens = FountainTokenizer(get_settings().cue_rules()).tokenize(content)

    if json_output:
        print(
            JsonFormatter().format(
                [{"type": t.type.value, "text": t.text, "raw": t.raw} for t in tokens]
            )
        )
        return

    for token in tokens:
        print(f"{token.type.value:<14} {token.text}".rstrip())
