"""Validation of LLM character enrichment responses."""

from __future__ import annotations

import json
import re
from typing import Any

from scenesmith.config import get_logger
from scenesmith.models import EnrichedCharacterProfile

logger = get_logger(__name__)

CODE_FENCE_PATTERN = re.compile(
    r"^\s*```[A-Za-z0-9_-]*\s*\n(.*?)\n?\s*```\s*$", re.DOTALL
)

# Wire name -> profile attribute
PROFILE_FIELDS = {
    "description": "description",
    "age": "age",
    "occupation": "occupation",
    "physicalAppearance": "physical_appearance",
    "personality": "personality",
    "goals": "goals",
    "fears": "fears",
    "backstory": "backstory",
    "arc": "arc",
    "notes": "notes",
}


def strip_code_fence(text: str) -> str:
    r"""Remove a surrounding Markdown code fence, if present.

    Example:
        >>> strip_code_fence('```json\n{"characters": []}\n```')
        '{"characters": []}'
    """
    match = CODE_FENCE_PATTERN.match(text)
    return match.group(1) if match else text


def _non_blank(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _validate_relationships(value: Any) -> dict[str, str] | None:
    if not isinstance(value, dict):
        return None
    relationships: dict[str, str] = {}
    for other, description in value.items():
        key = str(other).strip().upper()
        text = _non_blank(description)
        if key and text is not None:
            relationships[key] = text
    return relationships


def _validate_entry(entry: Any) -> EnrichedCharacterProfile | None:
    if not isinstance(entry, dict):
        return None
    name = _non_blank(entry.get("name"))
    if name is None:
        return None

    values: dict[str, Any] = {"name": name.upper()}
    for wire_name, attribute in PROFILE_FIELDS.items():
        raw = entry.get(wire_name, entry.get(attribute))
        text = _non_blank(raw)
        if text is not None:
            values[attribute] = text

    if "relationships" in entry:
        relationships = _validate_relationships(entry["relationships"])
        if relationships is not None:
            values["relationships"] = relationships

    return EnrichedCharacterProfile(**values)


def parse_enrichment_response(json_string: str) -> list[EnrichedCharacterProfile]:
    """Parse and validate an LLM response for character enrichments.

    Expected format::

        {"characters": [{"name": "JOHN", "personality": "...", ...}, ...]}

    Args:
        json_string: Raw response text, optionally wrapped in a code fence

    Returns:
        Validated profiles; invalid entries are dropped. Never raises: a
        malformed payload yields an empty list and a logged warning.
    """
    try:
        payload = json.loads(strip_code_fence(json_string))
    except (ValueError, TypeError, RecursionError) as e:
        # JSONDecodeError is a ValueError; so are oversized integer literals
        logger.warning("Enrichment response is not valid JSON", error=str(e))
        return []

    if not isinstance(payload, dict):
        logger.warning("Invalid enrichment structure: not an object")
        return []

    entries = payload.get("characters")
    if not isinstance(entries, list):
        logger.warning('Invalid enrichment structure: "characters" is not an array')
        return []

    profiles = [p for p in (_validate_entry(e) for e in entries) if p is not None]
    dropped = len(entries) - len(profiles)
    if dropped:
        logger.debug("Dropped invalid enrichment entries", dropped=dropped)
    return profiles
