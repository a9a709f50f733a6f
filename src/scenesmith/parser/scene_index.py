"""Lookups over segmented scenes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from scenesmith.models import Character
from scenesmith.parser.elements import is_scene_heading
from scenesmith.parser.fountain_models import Scene
from scenesmith.parser.fountain_parser import normalize_line_endings


def get_scene_at_line(scenes: Iterable[Scene], line_index: int) -> Scene | None:
    """Find the scene whose line range contains ``line_index``."""
    for scene in scenes:
        if scene.start_line <= line_index <= scene.end_line:
            return scene
    return None


def count_scenes(content: str) -> int:
    """Count scene headings in Fountain text."""
    lines = normalize_line_endings(content).split("\n")
    return sum(1 for line in lines if is_scene_heading(line))


def scenes_for_character(scenes: Iterable[Scene], name: str) -> list[Scene]:
    """Get the scenes in which a character speaks, matching names case-insensitively."""
    target = name.strip().upper()
    if not target:
        return []
    return [
        scene for scene in scenes if target in {c.upper() for c in scene.characters}
    ]


def character_scene_counts(scenes: Iterable[Scene]) -> dict[str, int]:
    """Count the distinct scenes each speaking character appears in."""
    counts: dict[str, int] = {}
    for scene in scenes:
        for name in {c.upper() for c in scene.characters}:
            counts[name] = counts.get(name, 0) + 1
    return counts


def link_appearances(
    characters: Sequence[Character], scenes: Sequence[Scene]
) -> list[Character]:
    """Add the ids of scenes a character speaks in to its appearances.

    Existing appearances are kept in order and new ids are appended.
    Only characters whose appearances changed are returned.
    """
    updated: list[Character] = []
    for character in characters:
        found = [scene.id for scene in scenes_for_character(scenes, character.name)]
        merged = list(dict.fromkeys([*character.appearances, *found]))
        if merged != character.appearances:
            updated.append(
                character.model_copy(update={"appearances": merged}, deep=True)
            )
    return updated
