"""Rich table output for scenes and characters."""

from __future__ import annotations

from rich.table import Table

from scenesmith.parser.fountain_models import Scene


def format_scene_table(scenes: list[Scene], title: str | None = None) -> Table:
    """Build a table listing scenes in order."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Heading")
    table.add_column("Location")
    table.add_column("Time")
    table.add_column("Characters")
    table.add_column("Lines", justify="right", style="dim")

    for scene in scenes:
        table.add_row(
            str(scene.number),
            scene.heading,
            scene.location,
            scene.time_of_day,
            ", ".join(scene.characters),
            f"{scene.start_line}-{scene.end_line}",
        )
    return table


def format_character_table(counts: list[tuple[str, int]]) -> Table:
    """Build a table of speaking characters and their scene counts."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Character", style="green")
    table.add_column("Scenes", justify="right")
    for name, count in counts:
        table.add_row(name, str(count))
    return table
