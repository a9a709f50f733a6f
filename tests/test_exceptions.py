"""Tests for the SceneSmith exception hierarchy."""

import pytest

from scenesmith.exceptions import (
    ConfigurationError,
    EnrichmentError,
    ParseError,
    ScenesmithError,
    ScenesmithFileNotFoundError,
    ValidationError,
    check_config_keys,
    check_file_path,
)


class TestScenesmithError:
    """Test error formatting."""

    def test_message_only(self):
        """Test an error without hint or details."""
        error = ScenesmithError("Something failed")
        assert error.format_error() == "Error: Something failed"
        assert str(error) == "Error: Something failed"

    def test_hint_and_details(self):
        """Test the full formatted message."""
        error = ScenesmithError(
            "Bad input", hint="Try again", details={"file": "a.txt", "line": 3}
        )
        assert error.format_error() == (
            "Error: Bad input\nHint: Try again\nDetails:\n  file: a.txt\n  line: 3"
        )

    @pytest.mark.parametrize(
        "error_class",
        [
            ConfigurationError,
            ParseError,
            ScenesmithFileNotFoundError,
            ValidationError,
            EnrichmentError,
        ],
    )
    def test_hierarchy(self, error_class):
        """Test that every error is a ScenesmithError."""
        with pytest.raises(ScenesmithError):
            raise error_class("failed")


class TestCheckFilePath:
    """Test check_file_path."""

    def test_existing_file(self, tmp_path):
        """Test that a regular file passes."""
        path = tmp_path / "script.fountain"
        path.write_text("INT. A - DAY\n")
        check_file_path(path)

    def test_missing(self, tmp_path):
        """Test a missing path."""
        with pytest.raises(ScenesmithFileNotFoundError) as exc_info:
            check_file_path(tmp_path / "missing.fountain", kind="screenplay")
        assert exc_info.value.message.startswith("Screenplay not found:")
        assert exc_info.value.hint

    def test_none(self):
        """Test that an empty path is reported as missing."""
        with pytest.raises(ScenesmithFileNotFoundError, match="File not found: None"):
            check_file_path(None)

    def test_directory(self, tmp_path):
        """Test that a directory is rejected."""
        with pytest.raises(ScenesmithFileNotFoundError, match="not a regular file"):
            check_file_path(tmp_path)


class TestCheckConfigKeys:
    """Test check_config_keys."""

    def test_valid(self):
        """Test that correct keys pass."""
        check_config_keys({"cue_max_words": 3, "log_level": "INFO"})

    @pytest.mark.parametrize(
        ("wrong", "correct"),
        [
            ("max_dialogue_excerpts", "evidence_max_dialogue_excerpts"),
            ("max_action_mentions", "evidence_max_action_mentions"),
            ("max_characters", "prompt_max_characters"),
            ("max_words", "cue_max_words"),
        ],
    )
    def test_wrong_keys(self, wrong, correct):
        """Test each known mistake and its suggested key."""
        with pytest.raises(ConfigurationError) as exc_info:
            check_config_keys({wrong: 1})
        assert exc_info.value.details["correct_key"] == correct
        assert exc_info.value.message == f"Invalid configuration key '{wrong}'"
