"""Commands for character evidence and enrichment."""

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from scenesmith.cli.formatters.json_formatter import JsonFormatter
from scenesmith.cli.utils.character_store import (
    dump_characters,
    load_characters,
    save_characters,
)
from scenesmith.cli.utils.cli_handler import CLIHandler
from scenesmith.config import get_logger, get_settings
from scenesmith.enrichment import (
    apply_enrichments,
    extract_character_evidence,
    format_all_evidence_for_prompt,
    parse_enrichment_response,
)
from scenesmith.exceptions import EnrichmentError, ParseError, check_file_path
from scenesmith.parser import FountainTokenizer, extract_characters
from scenesmith.parser.fountain_parser import read_fountain_file

logger = get_logger(__name__)
console = Console()


def evidence_command(
    script: Annotated[Path, typer.Argument(help="Path to the Fountain file")],
    characters: Annotated[
        list[str] | None,
        typer.Option(
            "--character",
            help="Character to collect evidence for (repeatable, default: all)",
        ),
    ] = None,
    max_characters: Annotated[
        int | None,
        typer.Option(
            "--max-characters",
            min=1,
            help="Maximum characters in the prompt text",
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Print character evidence as enrichment prompt text."""
    handler = CLIHandler(console)
    settings = get_settings()
    try:
        check_file_path(script, kind="screenplay")
        content = read_fountain_file(script)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    rules = settings.cue_rules()
    names = characters or extract_characters(content, rules)
    tokens = FountainTokenizer(rules).tokenize(content)
    evidence = extract_character_evidence(tokens, names, settings.evidence_options())
    logger.debug("Collected evidence", script=str(script), characters=len(evidence))

    if json_output:
        print(JsonFormatter().format(list(evidence.values())))
        return

    limit = max_characters or settings.prompt_max_characters
    text = format_all_evidence_for_prompt(evidence, limit)
    if text:
        print(text)
    else:
        console.print("[yellow]No characters found.[/yellow]")


def enrich_command(
    characters_file: Annotated[
        Path, typer.Argument(help="JSON file with the current character list")
    ],
    response_file: Annotated[
        Path, typer.Argument(help="JSON enrichment response from the LLM")
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the updated character list here (default: stdout)",
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Fill empty character fields from an enrichment response.

    Fields that already hold a value are never changed.
    """
    handler = CLIHandler(console)
    try:
        existing = load_characters(characters_file)
        check_file_path(response_file, kind="response file")
        try:
            response = response_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(
                message=f"Failed to read response file: {response_file}",
                hint="The response must be UTF-8 encoded JSON text.",
                details={"file": str(response_file), "error": str(e)},
            ) from e
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    profiles = parse_enrichment_response(response)
    changed = {c.id: c for c in apply_enrichments(existing, profiles)}
    updated = [changed.get(c.id, c) for c in existing]

    if output is not None:
        try:
            save_characters(output, updated)
        except OSError as e:
            handler.handle_error(
                EnrichmentError(
                    message=f"Failed to write characters: {output}",
                    hint="Check that the output path is a writable file",
                    details={"file": str(output), "error": str(e)},
                ),
                json_output,
            )
            return

    summary = {
        "profiles": len(profiles),
        "changed": len(changed),
        "total": len(updated),
    }

    if json_output:
        data: dict[str, Any] = dict(summary)
        if output is None:
            data["characters"] = updated
        else:
            data["output"] = str(output)
        print(JsonFormatter().format(data))
        return

    if output is None:
        print(dump_characters(updated))
        return

    handler.handle_success(
        f"Updated {summary['changed']} of {summary['total']} characters "
        f"from {summary['profiles']} profiles"
    )
