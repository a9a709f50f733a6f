"""SceneSmith CLI commands."""

from .enrich import enrich_command, evidence_command
from .screenplay import characters_command, scenes_command, tokens_command

__all__ = [
    "characters_command",
    "enrich_command",
    "evidence_command",
    "scenes_command",
    "tokens_command",
]
