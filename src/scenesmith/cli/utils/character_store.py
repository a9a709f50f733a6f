"""Read and write character lists stored as JSON files."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from scenesmith.config import get_logger
from scenesmith.exceptions import ValidationError, check_file_path
from scenesmith.models import Character

logger = get_logger(__name__)

_CHARACTER_LIST = TypeAdapter(list[Character])


def load_characters(path: Path) -> list[Character]:
    """Load a JSON array of character records.

    Args:
        path: File containing camelCase character records

    Returns:
        Parsed characters in file order

    Raises:
        ScenesmithFileNotFoundError: If the file does not exist
        ValidationError: If the file is not a valid character list
    """
    check_file_path(path, kind="character file")
    try:
        characters = _CHARACTER_LIST.validate_json(path.read_bytes())
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid character file: {path}",
            hint="Expected a JSON array of objects with at least 'id' and 'name'",
            details={"file": str(path), "errors": e.error_count()},
        ) from e
    logger.debug("Loaded characters", file=str(path), count=len(characters))
    return characters


def dump_characters(characters: Iterable[Character]) -> str:
    """Serialise characters to a JSON array using camelCase keys."""
    records = [c.model_dump(by_alias=True, exclude_none=True) for c in characters]
    return json.dumps(records, indent=2, ensure_ascii=False)


def save_characters(path: Path, characters: Iterable[Character]) -> None:
    """Write characters to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_characters(characters) + "\n", encoding="utf-8")
    logger.info("Saved characters", file=str(path))
