"""Tests for the shared record models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from scenesmith.models import Character


class TestCharacter:
    """Test Character validation."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("McDonald", "McDonald"), ("  Sarah ", "Sarah"), ("JOHN", "JOHN")],
    )
    def test_name_case_kept(self, name, expected):
        """Test that names are trimmed but keep their case."""
        character = Character.model_validate({"id": "c1", "name": name})
        assert character.name == expected

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        """Test that blank names are rejected."""
        with pytest.raises(PydanticValidationError, match="cannot be empty"):
            Character(id="c1", name=name)
