"""Flat token stream over a Fountain screenplay body.

Evidence extraction needs per-line token identity rather than accumulated
scene buffers, so this traversal is separate from the scene segmenter. It
uses the strict character cue variant plus a context rule: a cue must sit
after a blank line, scene heading or transition, and must be followed by a
non-blank line that is not a scene heading.
"""

from __future__ import annotations

import re

from scenesmith.config import get_logger
from scenesmith.models import ElementType
from scenesmith.parser.elements import (
    DEFAULT_CUE_RULES,
    CueRules,
    classify_line,
    extract_character_name,
    is_centered,
    is_scene_heading,
    strip_forced_heading,
)
from scenesmith.parser.fountain_models import FountainToken
from scenesmith.parser.fountain_parser import normalize_line_endings

logger = get_logger(__name__)

TITLE_PAGE_PATTERN = re.compile(
    r"^(Title|Credit|Author|Authors|Source|Draft|Date|Contact|Copyright|Notes|"
    r"Revision|Writer|Written by):\s*",
    re.IGNORECASE,
)
PAGE_BREAK_PATTERN = re.compile(r"^={3,}$")

# Element types after which a character cue may start
CUE_PREDECESSORS = frozenset({ElementType.SCENE_HEADING, ElementType.TRANSITION})


def split_title_page(lines: list[str]) -> tuple[dict[str, str], list[str]]:
    """Separate leading title page lines from the screenplay body.

    Args:
        lines: All lines of the document

    Returns:
        Tuple of (title page values keyed by lowercase field, body lines)
    """
    values: dict[str, str] = {}
    body_start = 0
    in_title_page = False

    for index, line in enumerate(lines):
        stripped = line.strip()
        match = TITLE_PAGE_PATTERN.match(line)
        if match:
            in_title_page = True
            values[match.group(1).lower()] = line[match.end() :].strip()
            body_start = index + 1
            continue
        if PAGE_BREAK_PATTERN.match(stripped):
            body_start = index + 1
            break
        if in_title_page and not stripped:
            body_start = index + 1
            continue
        if in_title_page:
            body_start = index
        break

    return values, lines[body_start:]


class FountainTokenizer:
    """Classify each line of a screenplay body into a token."""

    def __init__(self, rules: CueRules | None = None) -> None:
        self.rules = rules or DEFAULT_CUE_RULES

    def tokenize(self, content: str) -> list[FountainToken]:
        """Tokenize Fountain content.

        Args:
            content: Raw Fountain text

        Returns:
            Tokens in document order; each run of blank lines becomes one
            action token with empty text
        """
        _, body = split_title_page(normalize_line_endings(content).split("\n"))
        tokens: list[FountainToken] = []
        previous: ElementType | None = None
        after_blank = True

        for index, line in enumerate(body):
            trimmed = line.strip()
            if not trimmed:
                if not after_blank or not tokens:
                    tokens.append(FountainToken(ElementType.ACTION, "", line))
                after_blank = True
                previous = None
                continue

            next_line = body[index + 1].strip() if index + 1 < len(body) else ""
            element = self._classify(trimmed, previous, after_blank, next_line)
            text = self._normalize(element, trimmed)
            tokens.append(FountainToken(element, text, line))
            previous = element
            after_blank = False

        logger.debug("Tokenized screenplay", tokens=len(tokens))
        return tokens

    def _classify(
        self,
        trimmed: str,
        previous: ElementType | None,
        after_blank: bool,
        next_line: str,
    ) -> ElementType:
        cue_allowed = (
            (after_blank or previous in CUE_PREDECESSORS)
            and bool(next_line)
            and not is_scene_heading(next_line)
        )
        return classify_line(
            trimmed, previous, self.rules, strict=True, cue_allowed=cue_allowed
        )

    @staticmethod
    def _normalize(element: ElementType, trimmed: str) -> str:
        if element == ElementType.SCENE_HEADING:
            return strip_forced_heading(trimmed).upper()
        if element == ElementType.TRANSITION:
            if trimmed.startswith(">"):
                return trimmed[1:].strip().upper()
            return trimmed.upper()
        if is_centered(trimmed):
            return trimmed[1:-1].strip()
        return trimmed


def tokenize(content: str, rules: CueRules | None = None) -> list[FountainToken]:
    """Tokenize Fountain content with the given cue rules."""
    return FountainTokenizer(rules).tokenize(content)


def extract_characters(content: str, rules: CueRules | None = None) -> list[str]:
    """Get the sorted unique canonical names of every character cue."""
    names = {
        extract_character_name(token.text)
        for token in tokenize(content, rules)
        if token.type == ElementType.CHARACTER
    }
    return sorted(name for name in names if name)


def extract_scene_headings(content: str) -> list[tuple[int, str]]:
    """Get ``(number, heading)`` pairs for every scene heading token."""
    headings = [
        t.text for t in tokenize(content) if t.type == ElementType.SCENE_HEADING
    ]
    return list(enumerate(headings, start=1))


def normalize_content(content: str) -> str:
    """Normalize whitespace in Fountain content.

    Trailing whitespace is removed from every line, runs of more than one
    blank line collapse to one, and the result ends with a single newline.
    """
    lines = [line.rstrip() for line in normalize_line_endings(content).split("\n")]
    collapsed = re.sub(r"\n{3,}", "\n\n", "\n".join(lines))
    return collapsed.strip() + "\n"
