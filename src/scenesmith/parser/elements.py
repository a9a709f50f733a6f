"""Line classification for Fountain screenplay text.

Classification is an ordered chain of small predicates. Each predicate looks
at a single trimmed line and answers one question; ``classify_line`` runs
them in a fixed order and falls back to action, so malformed input never
raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from scenesmith.models import ElementType

SCENE_HEADING_PATTERN = re.compile(r"^(INT|EXT|EST|INT\.?/EXT|I/E)[.\s]", re.IGNORECASE)
SCENE_PREFIX_PATTERN = re.compile(r"^(INT\.?/EXT|INT|EXT|EST|I/E)[.\s]+", re.IGNORECASE)
HEADING_SPLIT_PATTERN = re.compile(r"\s*[-–—]\s*")
TRANSITION_VERB_PATTERN = re.compile(r"^(FADE|CUT|DISSOLVE|WIPE|SMASH CUT)")
ORDINAL_MARKER_PATTERN = re.compile(r"^(PAGE|ACT|SCENE)\s+\d+")
EXTENSION_PATTERN = re.compile(r"\s*\([^)]*\)\s*$")
DISAMBIGUATOR_PATTERN = re.compile(r"\s+\d+$")

STANDARD_TRANSITIONS = frozenset({"FADE IN:", "FADE OUT.", "FADE TO BLACK."})

NOT_CHARACTERS = frozenset(
    {
        "THE END",
        "CONTINUED",
        "MORE",
        "FADE IN",
        "FADE OUT",
        "FADE TO BLACK",
        "CUT TO",
        "DISSOLVE TO",
        "SMASH CUT TO",
        "MATCH CUT TO",
        "JUMP CUT TO",
        "TIME CUT",
        "INTERCUT",
        "BACK TO",
        "FLASHBACK",
        "END FLASHBACK",
        "DREAM SEQUENCE",
        "END DREAM SEQUENCE",
        "MONTAGE",
        "END MONTAGE",
        "SERIES OF SHOTS",
        "END SERIES OF SHOTS",
        "CONTINUOUS",
        "LATER",
        "MOMENTS LATER",
        "SAME TIME",
        "SPLIT SCREEN",
        "END SPLIT SCREEN",
        "STOCK SHOT",
        "ANGLE ON",
        "CLOSE ON",
        "INSERT",
        "SUPER",
        "TITLE",
        "SUBTITLE",
        "V.O.",
        "O.S.",
        "O.C.",
        "CONT'D",
        "CONTD",
        "PRE-LAP",
    }
)

# Element types after which an unclassified line continues a speech
DIALOGUE_CONTEXT = frozenset(
    {ElementType.CHARACTER, ElementType.PARENTHETICAL, ElementType.DIALOGUE}
)


@dataclass(frozen=True)
class CueRules:
    """Thresholds for recognising a character cue."""

    min_length: int = 2
    max_length: int = 40
    max_words: int = 5


DEFAULT_CUE_RULES = CueRules()


def _is_forced_heading(trimmed: str) -> bool:
    if trimmed.startswith("!"):
        return bool(trimmed[1:].strip())
    if trimmed.startswith(".") and not trimmed.startswith(".."):
        return bool(trimmed[1:].strip())
    return False


def is_scene_heading(line: str) -> bool:
    """Check whether a line is a scene heading, standard or forced."""
    trimmed = line.strip()
    if not trimmed:
        return False
    return bool(SCENE_HEADING_PATTERN.match(trimmed)) or _is_forced_heading(trimmed)


def strip_forced_heading(line: str) -> str:
    """Remove a leading ``.`` or ``!`` heading marker and trim."""
    trimmed = line.strip()
    if _is_forced_heading(trimmed):
        return trimmed[1:].strip()
    return trimmed


def is_centered(line: str) -> bool:
    """Check for centered text, written as ``> text <``."""
    trimmed = line.strip()
    return len(trimmed) >= 2 and trimmed.startswith(">") and trimmed.endswith("<")


def is_transition(line: str) -> bool:
    """Check whether a line is a transition such as ``CUT TO:``."""
    trimmed = line.strip()
    if not trimmed:
        return False
    if trimmed.startswith(">"):
        return not trimmed.endswith("<") and bool(trimmed[1:].strip())
    if trimmed in STANDARD_TRANSITIONS:
        return True
    return trimmed.endswith("TO:") and trimmed == trimmed.upper()


def is_parenthetical(line: str) -> bool:
    """Check whether a line is a parenthetical like ``(quietly)``."""
    trimmed = line.strip()
    return len(trimmed) >= 2 and trimmed.startswith("(") and trimmed.endswith(")")


def strip_extensions(line: str) -> str:
    """Remove trailing parenthetical extensions such as ``(V.O.) (CONT'D)``."""
    name = line.strip()
    while True:
        stripped = EXTENSION_PATTERN.sub("", name)
        if stripped == name:
            return name.strip()
        name = stripped


def is_character_cue(
    line: str, rules: CueRules = DEFAULT_CUE_RULES, strict: bool = False
) -> bool:
    """Check whether a line looks like a character cue.

    Args:
        line: Raw line text
        rules: Length and word thresholds
        strict: Also enforce the word limit

    Returns:
        True when every cue heuristic holds
    """
    trimmed = line.strip()
    if not trimmed or is_parenthetical(trimmed):
        return False
    if trimmed.startswith(">") or trimmed.endswith("<"):
        return False
    if trimmed.endswith("TO:") or trimmed.endswith("."):
        return False
    if is_scene_heading(trimmed):
        return False

    name = strip_extensions(trimmed)
    if not name or name != name.upper():
        return False
    if not (rules.min_length <= len(name) <= rules.max_length):
        return False
    if not any(ch.isalpha() for ch in name):
        return False
    if name.rstrip(":") in NOT_CHARACTERS:
        return False
    if TRANSITION_VERB_PATTERN.match(name) or ORDINAL_MARKER_PATTERN.match(name):
        return False
    return not (strict and len(name.split()) > rules.max_words)


def extract_character_name(line: str) -> str:
    """Get the canonical speaker name from a cue line.

    Trailing extensions and a numeric disambiguator are removed, so
    ``GUARD 2 (O.S.)`` becomes ``GUARD``.
    """
    name = strip_extensions(line)
    name = DISAMBIGUATOR_PATTERN.sub("", name)
    return name.strip().upper()


def parse_scene_heading(heading: str) -> tuple[str, str]:
    """Split a scene heading into location and time of day.

    Args:
        heading: Scene heading text (e.g., "INT. COFFEE SHOP - DAY")

    Returns:
        Tuple of (location, time_of_day); either may be empty
    """
    rest = SCENE_PREFIX_PATTERN.sub("", strip_forced_heading(heading), count=1)
    parts = HEADING_SPLIT_PATTERN.split(rest)
    location = parts[0].strip()
    time_of_day = parts[1].strip() if len(parts) > 1 else ""
    return location, time_of_day


def classify_line(
    line: str,
    previous: ElementType | None = None,
    rules: CueRules = DEFAULT_CUE_RULES,
    strict: bool = False,
    cue_allowed: bool = True,
) -> ElementType:
    """Classify a single non-blank line.

    Args:
        line: Raw line text
        previous: Type of the preceding line in the same block, if any
        rules: Character cue thresholds
        strict: Use the strict cue variant
        cue_allowed: Whether the surrounding lines permit a cue here

    Returns:
        The element type; unrecognised lines are action
    """
    if is_scene_heading(line):
        return ElementType.SCENE_HEADING
    if is_transition(line):
        return ElementType.TRANSITION
    if is_centered(line):
        return ElementType.ACTION
    if is_parenthetical(line):
        return ElementType.PARENTHETICAL
    if cue_allowed and is_character_cue(line, rules, strict=strict):
        return ElementType.CHARACTER
    if previous in DIALOGUE_CONTEXT:
        return ElementType.DIALOGUE
    return ElementType.ACTION
