"""Bounded character evidence extraction from a token stream.

Evidence is what an enrichment prompt is built from: a few dialogue samples
per character, a few action lines that mention them, and how often they
share a scene with each other character.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from scenesmith.config import get_logger
from scenesmith.models import ElementType
from scenesmith.parser.elements import extract_character_name
from scenesmith.parser.fountain_models import FountainToken

logger = get_logger(__name__)

TRUNCATION_SUFFIX = "..."

# Tokens that end a dialogue excerpt
EXCERPT_STOP_TYPES = frozenset(
    {ElementType.CHARACTER, ElementType.SCENE_HEADING, ElementType.ACTION}
)


@dataclass(frozen=True)
class EvidenceOptions:
    """Limits on how much evidence is kept per character."""

    max_dialogue_excerpts: int = 5
    max_action_mentions: int = 3
    max_dialogue_lines_per_excerpt: int = 4
    max_action_length: int = 200


@dataclass
class CharacterEvidence:
    """Evidence collected for a single character."""

    name: str
    dialogue_excerpts: list[str] = field(default_factory=list)
    action_mentions: list[str] = field(default_factory=list)
    co_occurrences: dict[str, int] = field(default_factory=dict)
    scene_count: int = 0

    def to_dict(self) -> dict[str, object]:
        """Serialise with camelCase keys."""
        return {
            "name": self.name,
            "dialogueExcerpts": list(self.dialogue_excerpts),
            "actionMentions": list(self.action_mentions),
            "coOccurrences": dict(self.co_occurrences),
            "sceneCount": self.scene_count,
        }


def _compile_name_pattern(name: str) -> re.Pattern[str]:
    """Match a name as a whole word, case-insensitively.

    Boundaries are any non-alphanumeric character so names containing
    punctuation such as ``DR. WHO`` still match.
    """
    escaped = re.escape(name)
    return re.compile(rf"(?<![A-Za-z0-9]){escaped}(?![A-Za-z0-9])", re.IGNORECASE)


def truncate_action(text: str, max_length: int = 200) -> str:
    """Shorten text longer than ``max_length``, ending it with ``...``."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def collect_dialogue_lines(
    tokens: Sequence[FountainToken], start: int, max_lines: int
) -> list[str]:
    """Collect the dialogue and parenthetical lines following a cue.

    Args:
        tokens: Full token stream
        start: Index of the first token after the cue
        max_lines: Maximum number of lines to collect

    Returns:
        Collected lines with parentheticals rendered as ``(text)``
    """
    lines: list[str] = []
    for token in tokens[start:]:
        if len(lines) >= max_lines or token.type in EXCERPT_STOP_TYPES:
            break
        if token.type == ElementType.DIALOGUE:
            lines.append(token.text)
        elif token.type == ElementType.PARENTHETICAL:
            inner = token.text.strip()
            if inner.startswith("("):
                inner = inner[1:]
            if inner.endswith(")"):
                inner = inner[:-1]
            lines.append(f"({inner})")
    return lines


class _EvidenceBuilder:
    """Per-call accumulator for evidence and the open scene."""

    def __init__(self, names: list[str], options: EvidenceOptions) -> None:
        self.options = options
        self.evidence = {name: CharacterEvidence(name=name) for name in names}
        self.patterns = [(name, _compile_name_pattern(name)) for name in names]
        self.scene: dict[str, None] = {}
        self.in_scene = False

    def open_scene(self) -> None:
        if self.in_scene:
            self.close_scene()
        self.scene = {}
        self.in_scene = True

    def close_scene(self) -> None:
        present = list(self.scene)
        for name_a in present:
            co_occurrences = self.evidence[name_a].co_occurrences
            for name_b in present:
                if name_a != name_b:
                    co_occurrences[name_b] = co_occurrences.get(name_b, 0) + 1

    def add_dialogue(self, tokens: Sequence[FountainToken], index: int) -> None:
        speaker = extract_character_name(tokens[index].text)
        evidence = self.evidence.get(speaker)
        if evidence is None:
            return
        self.scene.setdefault(speaker, None)
        if len(evidence.dialogue_excerpts) >= self.options.max_dialogue_excerpts:
            return
        lines = collect_dialogue_lines(
            tokens, index + 1, self.options.max_dialogue_lines_per_excerpt
        )
        if lines:
            evidence.dialogue_excerpts.append(f"{speaker}:\n" + "\n".join(lines))

    def add_action(self, text: str) -> None:
        for name, pattern in self.patterns:
            if not pattern.search(text):
                continue
            self.scene.setdefault(name, None)
            evidence = self.evidence[name]
            if len(evidence.action_mentions) < self.options.max_action_mentions:
                evidence.action_mentions.append(
                    truncate_action(text, self.options.max_action_length)
                )

    def finish(self) -> dict[str, CharacterEvidence]:
        if self.in_scene:
            self.close_scene()
        for evidence in self.evidence.values():
            # Approximation kept for parity with existing prompts
            evidence.scene_count = max(
                len(evidence.dialogue_excerpts),
                max(evidence.co_occurrences.values(), default=0),
            )
        return self.evidence


def extract_character_evidence(
    tokens: Sequence[FountainToken],
    character_names: Iterable[str],
    options: EvidenceOptions | None = None,
) -> dict[str, CharacterEvidence]:
    """Extract bounded evidence for each known character.

    Args:
        tokens: Token stream from the tokenizer
        character_names: Known character names; matched case-insensitively
        options: Extraction limits, defaults when omitted

    Returns:
        Evidence keyed by uppercase name, in sorted name order
    """
    names = sorted({n.strip().upper() for n in character_names if n and n.strip()})
    builder = _EvidenceBuilder(names, options or EvidenceOptions())

    for index, token in enumerate(tokens):
        if token.type == ElementType.SCENE_HEADING:
            builder.open_scene()
        elif token.type == ElementType.CHARACTER:
            builder.add_dialogue(tokens, index)
        elif token.type == ElementType.ACTION and token.text.strip():
            builder.add_action(token.text)

    evidence = builder.finish()
    logger.debug(
        "Extracted character evidence",
        characters=len(evidence),
        tokens=len(tokens),
    )
    return evidence
