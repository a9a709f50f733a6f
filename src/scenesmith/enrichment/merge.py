"""Fill-only-missing merge of enrichment data into character records.

A value is only ever written into a field that is empty. Anything the user
(or an earlier pass) has already filled in is left alone, so applying the
same enrichment twice changes nothing the second time.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from scenesmith.config import get_logger
from scenesmith.exceptions import ValidationError
from scenesmith.models import Character, EnrichedCharacterProfile
from scenesmith.parser.fountain_models import Scene

logger = get_logger(__name__)

ENRICHABLE_FIELDS: tuple[str, ...] = (
    "description",
    "age",
    "occupation",
    "physical_appearance",
    "personality",
    "goals",
    "fears",
    "backstory",
    "arc",
    "notes",
)


def is_field_empty(value: Any) -> bool:
    """Check if a value counts as empty and may be filled."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def build_character_id_map(characters: Iterable[Character]) -> dict[str, str]:
    """Map uppercase character names to ids."""
    return {character.name.upper(): character.id for character in characters}


def _fill_relationships(
    current: Mapping[str, str], additions: Iterable[tuple[str, str]]
) -> dict[str, str]:
    relationships = dict(current)
    for target_id, description in additions:
        if is_field_empty(relationships.get(target_id)):
            relationships[target_id] = description
    return relationships


def merge_enriched_profile(
    existing: Character,
    enriched: EnrichedCharacterProfile,
    character_id_map: Mapping[str, str],
) -> Character:
    """Merge an enriched profile into a character, filling only empty fields.

    Args:
        existing: Current character record
        enriched: Validated enrichment for the same character
        character_id_map: Uppercase name -> id, for relationship targets

    Returns:
        A new character; ``existing`` is never modified
    """
    updates: dict[str, Any] = {}

    for name in ENRICHABLE_FIELDS:
        value = getattr(enriched, name)
        if is_field_empty(value):
            continue
        if is_field_empty(getattr(existing, name)):
            updates[name] = str(value)

    if enriched.relationships:
        resolved = [
            (character_id_map[other.upper()], description)
            for other, description in enriched.relationships.items()
            if other.upper() in character_id_map
        ]
        updates["relationships"] = _fill_relationships(existing.relationships, resolved)

    return existing.model_copy(update=updates, deep=True)


def apply_enrichments(
    characters: Sequence[Character],
    enrichments: Iterable[EnrichedCharacterProfile],
) -> list[Character]:
    """Merge each enrichment into every character with the same name.

    Args:
        characters: Existing character records
        enrichments: Validated profiles; unknown names are skipped

    Returns:
        Only the characters whose merged form differs from the original,
        in input order
    """
    id_map = build_character_id_map(characters)
    current = {character.id: character for character in characters}
    ids_by_name: dict[str, list[str]] = {}
    for character in characters:
        ids_by_name.setdefault(character.name.upper(), []).append(character.id)
    skipped = 0

    for profile in enrichments:
        ids = ids_by_name.get(profile.name.upper())
        if not ids:
            skipped += 1
            continue
        for character_id in ids:
            current[character_id] = merge_enriched_profile(
                current[character_id], profile, id_map
            )

    changed: list[Character] = []
    seen: set[str] = set()
    for character in characters:
        if character.id in seen:
            continue
        seen.add(character.id)
        merged = current[character.id]
        if merged != character:
            changed.append(merged)

    logger.info(
        "Applied character enrichments",
        changed=len(changed),
        skipped_unknown=skipped,
    )
    return changed


@dataclass
class MergeResult:
    """Outcome of absorbing duplicate characters into one record."""

    character: Character
    deleted_ids: list[str] = field(default_factory=list)
    merged_names: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    updated_scenes: list[Scene] = field(default_factory=list)


def _absorb(kept: Character, other: Character) -> Character:
    """Fill the kept character's empty data from a duplicate."""
    updates: dict[str, Any] = {
        name: getattr(other, name)
        for name in ENRICHABLE_FIELDS
        if is_field_empty(getattr(kept, name))
        and not is_field_empty(getattr(other, name))
    }
    updates["relationships"] = _fill_relationships(
        kept.relationships,
        ((k, v) for k, v in other.relationships.items() if k != kept.id),
    )
    updates["custom_attributes"] = {**other.custom_attributes, **kept.custom_attributes}
    appearances = [*kept.appearances, *other.appearances]
    updates["appearances"] = list(dict.fromkeys(appearances))
    if is_field_empty(kept.image_url) and not is_field_empty(other.image_url):
        updates["image_url"] = other.image_url
    return kept.model_copy(update=updates, deep=True)


def merge_characters(
    characters: Sequence[Character],
    scenes: Sequence[Scene],
    keep_name: str,
    merge_names: Iterable[str],
) -> MergeResult:
    """Absorb duplicate characters into the one named ``keep_name``.

    The kept character takes the union of appearances and fills its empty
    fields from each duplicate. Scenes listing a duplicate name list the
    kept name instead.

    Args:
        characters: All character records
        scenes: All scenes
        keep_name: Name of the character that survives
        merge_names: Names of the duplicates to absorb

    Returns:
        The merged character, ids to delete and scenes that changed

    Raises:
        ValidationError: If ``keep_name`` matches no character
    """
    by_name = {c.name.upper(): c for c in characters}
    keep_key = keep_name.strip().upper()
    if keep_key not in by_name:
        raise ValidationError(
            message=f"Character to keep not found: {keep_name}",
            hint="Use the exact name of an existing character",
            details={"available": sorted(by_name)},
        )

    kept = by_name[keep_key]
    result = MergeResult(character=kept)
    absorbed: set[str] = set()

    for raw_name in merge_names:
        key = raw_name.strip().upper()
        if key == keep_key or key in absorbed:
            continue
        other = by_name.get(key)
        if other is None:
            result.not_found.append(raw_name)
            continue
        kept = _absorb(kept, other)
        absorbed.add(key)
        result.merged_names.append(other.name)
        result.deleted_ids.append(other.id)

    if result.deleted_ids:
        deleted = set(result.deleted_ids)
        kept = kept.model_copy(
            update={
                "relationships": {
                    k: v for k, v in kept.relationships.items() if k not in deleted
                }
            },
            deep=True,
        )

    for scene in scenes:
        names = [c.upper() for c in scene.characters]
        if not absorbed.intersection(names):
            continue
        replaced = [kept.name.upper() if n in absorbed else n for n in names]
        result.updated_scenes.append(
            dataclasses.replace(scene, characters=list(dict.fromkeys(replaced)))
        )

    result.character = kept
    logger.info(
        "Merged characters",
        kept=kept.name,
        merged=result.merged_names,
        not_found=result.not_found,
        scenes_updated=len(result.updated_scenes),
    )
    return result
