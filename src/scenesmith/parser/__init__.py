"""Fountain screenplay format parser for SceneSmith."""

from __future__ import annotations

from .elements import (
    DEFAULT_CUE_RULES,
    NOT_CHARACTERS,
    CueRules,
    classify_line,
    extract_character_name,
    is_centered,
    is_character_cue,
    is_parenthetical,
    is_scene_heading,
    is_transition,
    parse_scene_heading,
    strip_forced_heading,
)
from .fountain_models import FountainToken, ParsedScreenplay, Scene
from .fountain_parser import FountainParser
from .scene_index import (
    character_scene_counts,
    count_scenes,
    get_scene_at_line,
    link_appearances,
    scenes_for_character,
)
from .tokenizer import (
    FountainTokenizer,
    extract_characters,
    extract_scene_headings,
    normalize_content,
    tokenize,
)

__all__ = [
    "DEFAULT_CUE_RULES",
    "NOT_CHARACTERS",
    "CueRules",
    "FountainParser",
    "FountainToken",
    "FountainTokenizer",
    "ParsedScreenplay",
    "Scene",
    "character_scene_counts",
    "classify_line",
    "count_scenes",
    "extract_character_name",
    "extract_characters",
    "extract_scene_headings",
    "get_scene_at_line",
    "is_centered",
    "is_character_cue",
    "is_parenthetical",
    "is_scene_heading",
    "is_transition",
    "link_appearances",
    "normalize_content",
    "parse_scene_heading",
    "scenes_for_character",
    "strip_forced_heading",
    "tokenize",
]
