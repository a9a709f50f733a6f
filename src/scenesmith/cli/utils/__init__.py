"""CLI utility helpers."""

from scenesmith.cli.utils.cli_handler import CLIHandler
from scenesmith.cli.utils.character_store import load_characters, save_characters

__all__ = ["CLIHandler", "load_characters", "save_characters"]
