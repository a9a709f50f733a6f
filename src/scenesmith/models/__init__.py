"""SceneSmith data models.

This module defines the character records that enrichment operates on and the
transient profile shape produced by validating an LLM response. Records use
camelCase aliases on the wire so they round-trip with the character store.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ElementType(str, Enum):
    """Fountain screenplay element types."""

    SCENE_HEADING = "scene-heading"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    ACTION = "action"
    TRANSITION = "transition"


class _CamelModel(BaseModel):
    """Frozen model that serialises with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Character(_CamelModel):
    """A character record as kept by the character store."""

    id: str
    name: str
    description: str | None = None
    age: str | int | None = None
    occupation: str | None = None
    physical_appearance: str | None = None
    personality: str | None = None
    goals: str | None = None
    fears: str | None = None
    backstory: str | None = None
    arc: str | None = None
    relationships: dict[str, str] = Field(default_factory=dict)
    custom_attributes: dict[str, str] = Field(default_factory=dict)
    appearances: list[str] = Field(default_factory=list)
    notes: str | None = None
    image_url: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Require a non-blank name; surrounding whitespace is dropped."""
        if not v or not v.strip():
            raise ValueError("Character name cannot be empty")
        return v.strip()


class EnrichedCharacterProfile(_CamelModel):
    """Externally generated profile data for one character.

    Every field except ``name`` is optional; absent fields are never
    written during a merge.
    """

    name: str
    description: str | None = None
    age: str | None = None
    occupation: str | None = None
    physical_appearance: str | None = None
    personality: str | None = None
    goals: str | None = None
    fears: str | None = None
    backstory: str | None = None
    arc: str | None = None
    notes: str | None = None
    relationships: dict[str, str] | None = None


__all__ = [
    "Character",
    "ElementType",
    "EnrichedCharacterProfile",
]
