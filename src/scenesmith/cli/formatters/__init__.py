"""Output formatters for SceneSmith CLI."""

from scenesmith.cli.formatters.json_formatter import JsonFormatter
from scenesmith.cli.formatters.table_formatter import (
    format_character_table,
    format_scene_table,
)

__all__ = ["JsonFormatter", "format_character_table", "format_scene_table"]
