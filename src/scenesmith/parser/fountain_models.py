"""Data models for Fountain screenplay parsing."""

from dataclasses import dataclass, field
from typing import Any

from scenesmith.models import ElementType


@dataclass(frozen=True)
class FountainToken:
    """A single classified line of a screenplay body."""

    type: ElementType
    text: str
    raw: str


@dataclass
class Scene:
    """Represents a scene in a screenplay."""

    id: str
    number: int
    heading: str
    location: str = ""
    time_of_day: str = ""
    characters: list[str] = field(default_factory=list)
    start_line: int = 0
    end_line: int = 0
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise the scene using the store's camelCase field names."""
        return {
            "id": self.id,
            "number": self.number,
            "heading": self.heading,
            "location": self.location,
            "timeOfDay": self.time_of_day,
            "characters": list(self.characters),
            "startLine": self.start_line,
            "endLine": self.end_line,
            "content": self.content,
        }


@dataclass
class ParsedScreenplay:
    """Represents a parsed screenplay."""

    title: str | None
    author: str | None
    scenes: list[Scene]
    characters: list[str] = field(default_factory=list)
