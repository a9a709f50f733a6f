"""Fountain screenplay segmentation into ordered scenes."""

import re
from pathlib import Path

from scenesmith.config import get_logger
from scenesmith.exceptions import ParseError
from scenesmith.parser.elements import (
    DEFAULT_CUE_RULES,
    CueRules,
    extract_character_name,
    is_character_cue,
    is_scene_heading,
    parse_scene_heading,
    strip_forced_heading,
)
from scenesmith.parser.fountain_models import ParsedScreenplay, Scene

logger = get_logger(__name__)

TITLE_PATTERN = re.compile(r"^Title:\s*(.*)$", re.IGNORECASE)
AUTHOR_PATTERN = re.compile(
    r"^(?:Author|Authors|Writer|Written by):\s*(.*)$", re.IGNORECASE
)


def normalize_line_endings(content: str) -> str:
    """Convert ``\\r\\n`` and bare ``\\r`` line endings to ``\\n``."""
    return content.replace("\r\n", "\n").replace("\r", "\n")


def read_fountain_file(file_path: Path | str) -> str:
    """Read a Fountain file as UTF-8 text.

    Raises:
        ParseError: If the file cannot be read or decoded
    """
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(
            "Failed to read fountain file", file=str(file_path), error=str(e)
        )
        raise ParseError(
            message=f"Failed to read Fountain file: {file_path}",
            hint="Check that the file exists and is UTF-8 encoded text.",
            details={
                "file": str(file_path),
                "error": str(e),
            },
        ) from e


def make_scene_id(number: int, start_line: int) -> str:
    """Build the deterministic id of a scene."""
    return f"scene-{number}-{start_line}"


class _OpenScene:
    """Mutable buffer for the scene currently being read."""

    def __init__(self, number: int, heading_line: str, start_line: int) -> None:
        self.number = number
        self.heading = strip_forced_heading(heading_line)
        self.start_line = start_line
        self.lines: list[str] = []
        self.characters: dict[str, None] = {}

    def close(self, end_line: int) -> Scene:
        location, time_of_day = parse_scene_heading(self.heading)
        return Scene(
            id=make_scene_id(self.number, self.start_line),
            number=self.number,
            heading=self.heading,
            location=location,
            time_of_day=time_of_day,
            characters=list(self.characters),
            start_line=self.start_line,
            end_line=max(end_line, self.start_line),
            content="\n".join(self.lines),
        )


class FountainParser:
    """Parse Fountain text into scenes and speaking characters."""

    def __init__(self, rules: CueRules | None = None) -> None:
        """Initialize the parser.

        Args:
            rules: Character cue thresholds, defaults when omitted
        """
        self.rules = rules or DEFAULT_CUE_RULES

    def parse(self, content: str) -> ParsedScreenplay:
        """Parse Fountain content into structured format.

        Args:
            content: Raw Fountain text

        Returns:
            Parsed screenplay with scenes in document order
        """
        lines = normalize_line_endings(content).split("\n")
        scenes: list[Scene] = []
        characters: dict[str, None] = {}
        title: str | None = None
        author: str | None = None
        current: _OpenScene | None = None

        for index, line in enumerate(lines):
            if current is None:
                title_match = TITLE_PATTERN.match(line)
                if title_match:
                    title = title_match.group(1).strip()
                    continue
                author_match = AUTHOR_PATTERN.match(line)
                if author_match:
                    author = author_match.group(1).strip()
                    continue

            if is_scene_heading(line):
                if current is not None:
                    scenes.append(current.close(index - 1))
                current = _OpenScene(len(scenes) + 1, line, index)
            elif current is not None and is_character_cue(line, self.rules):
                name = extract_character_name(line)
                if name:
                    current.characters.setdefault(name, None)
                    characters.setdefault(name, None)

            if current is not None:
                current.lines.append(line)

        if current is not None:
            scenes.append(current.close(len(lines) - 1))

        return ParsedScreenplay(
            title=title,
            author=author,
            scenes=scenes,
            characters=list(characters),
        )

    def parse_file(self, file_path: Path) -> ParsedScreenplay:
        """Parse a Fountain file.

        Args:
            file_path: Path to the Fountain file

        Returns:
            Parsed screenplay

        Raises:
            ParseError: If the file cannot be read or is not valid UTF-8
        """
        logger.debug("Parsing fountain file", file=str(file_path))
        screenplay = self.parse(read_fountain_file(file_path))
        logger.info(
            "Parsed screenplay",
            file=str(file_path),
            title=screenplay.title,
            scenes=len(screenplay.scenes),
            characters=len(screenplay.characters),
        )
        return screenplay
