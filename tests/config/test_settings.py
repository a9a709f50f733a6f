"""Tests for configuration settings."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from scenesmith.config import (
    ScenesmithSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)
from scenesmith.enrichment import EvidenceOptions
from scenesmith.exceptions import ConfigurationError
from scenesmith.parser import CueRules


class TestScenesmithSettings:
    """Test ScenesmithSettings defaults and validation."""

    def test_defaults(self):
        """Test default values."""
        settings = ScenesmithSettings()
        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.log_file is None
        assert settings.evidence_max_dialogue_excerpts == 5
        assert settings.evidence_max_action_mentions == 3
        assert settings.evidence_max_dialogue_lines == 4
        assert settings.evidence_max_action_length == 200
        assert settings.prompt_max_characters == 20
        assert (settings.cue_min_length, settings.cue_max_length) == (2, 40)
        assert settings.cue_max_words == 5

    def test_env_override(self, monkeypatch):
        """Test SCENESMITH_ environment variables."""
        monkeypatch.setenv("SCENESMITH_LOG_LEVEL", "debug")
        monkeypatch.setenv("SCENESMITH_CUE_MAX_WORDS", "3")
        settings = ScenesmithSettings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.cue_max_words == 3

    def test_dotenv_file(self, tmp_path):
        """Test that a .env file in the working directory is read."""
        (tmp_path / ".env").write_text("SCENESMITH_PROMPT_MAX_CHARACTERS=7\n")
        assert ScenesmithSettings().prompt_max_characters == 7

    def test_log_format_normalized(self):
        """Test case-insensitive log format."""
        assert ScenesmithSettings(log_format="JSON").log_format == "json"

    @pytest.mark.parametrize(
        "values",
        [
            {"log_level": "LOUD"},
            {"log_format": "xml"},
            {"log_level": 10},
            {"evidence_max_dialogue_excerpts": -1},
            {"evidence_max_action_length": 3},
            {"cue_max_words": 0},
        ],
    )
    def test_invalid_values(self, values):
        """Test that out-of-range values are rejected."""
        with pytest.raises(PydanticValidationError):
            ScenesmithSettings(**values)

    def test_log_file_expanded(self, tmp_path, monkeypatch):
        """Test that environment variables in log_file are expanded."""
        monkeypatch.setenv("LOGDIR", str(tmp_path))
        settings = ScenesmithSettings(log_file="$LOGDIR/app.log")
        assert settings.log_file == (tmp_path / "app.log").resolve()

    def test_log_file_rejects_collections(self):
        """Test that collection types are not accepted as paths."""
        with pytest.raises(PydanticValidationError, match="cannot accept list"):
            ScenesmithSettings(log_file=["a.log"])

    def test_evidence_options(self):
        """Test conversion to evidence limits."""
        settings = ScenesmithSettings(
            evidence_max_dialogue_excerpts=2, evidence_max_action_length=50
        )
        assert settings.evidence_options() == EvidenceOptions(
            max_dialogue_excerpts=2,
            max_action_mentions=3,
            max_dialogue_lines_per_excerpt=4,
            max_action_length=50,
        )

    def test_cue_rules(self):
        """Test conversion to cue thresholds."""
        settings = ScenesmithSettings(cue_min_length=3, cue_max_words=2)
        assert settings.cue_rules() == CueRules(
            min_length=3, max_length=40, max_words=2
        )


class TestFromFile:
    """Test loading settings from files."""

    def test_yaml(self, tmp_path):
        """Test YAML configuration."""
        path = tmp_path / "config.yaml"
        path.write_text("log_level: info\nprompt_max_characters: 5\n")
        settings = ScenesmithSettings.from_file(path)
        assert settings.log_level == "INFO"
        assert settings.prompt_max_characters == 5

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file gives defaults."""
        path = tmp_path / "config.yml"
        path.write_text("")
        assert ScenesmithSettings.from_file(path).log_level == "WARNING"

    def test_toml(self, tmp_path):
        """Test TOML configuration."""
        path = tmp_path / "config.toml"
        path.write_text("cue_max_length = 30\ndebug = true\n")
        settings = ScenesmithSettings.from_file(path)
        assert settings.cue_max_length == 30
        assert settings.debug is True

    def test_json(self, tmp_path):
        """Test JSON configuration."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"evidence_max_action_mentions": 1}))
        settings = ScenesmithSettings.from_file(path)
        assert settings.evidence_max_action_mentions == 1

    def test_unsupported_format(self, tmp_path):
        """Test that unknown extensions raise ConfigurationError."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n")
        with pytest.raises(ConfigurationError) as exc_info:
            ScenesmithSettings.from_file(path)
        assert "Unsupported configuration file format: .ini" in str(exc_info.value)
        assert exc_info.value.details["detected_format"] == ".ini"

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ScenesmithSettings.from_file(tmp_path / "nope.yaml")

    def test_wrong_key(self, tmp_path):
        """Test that common key mistakes get a hint."""
        path = tmp_path / "config.yaml"
        path.write_text("max_words: 3\n")
        with pytest.raises(ConfigurationError) as exc_info:
            ScenesmithSettings.from_file(path)
        assert exc_info.value.hint == "Use 'cue_max_words' instead of 'max_words'"


class TestMultipleSources:
    """Test source precedence."""

    def test_later_files_win(self, tmp_path):
        """Test that later config files override earlier ones."""
        first = tmp_path / "a.yaml"
        first.write_text("cue_max_words: 3\nprompt_max_characters: 4\n")
        second = tmp_path / "b.json"
        second.write_text(json.dumps({"cue_max_words": 7}))
        settings = ScenesmithSettings.from_multiple_sources(
            config_files=[first, second]
        )
        assert settings.cue_max_words == 7
        assert settings.prompt_max_characters == 4

    def test_cli_args_win(self, tmp_path):
        """Test that CLI arguments override files and skip None."""
        path = tmp_path / "a.yaml"
        path.write_text("log_level: ERROR\ncue_max_words: 3\n")
        settings = ScenesmithSettings.from_multiple_sources(
            config_files=[path], cli_args={"log_level": "DEBUG", "cue_max_words": None}
        )
        assert settings.log_level == "DEBUG"
        assert settings.cue_max_words == 3

    def test_missing_file_skipped(self, tmp_path):
        """Test that a missing file falls back to defaults."""
        settings = ScenesmithSettings.from_multiple_sources(
            config_files=[tmp_path / "missing.yaml"]
        )
        assert settings.cue_max_words == 5

    def test_env_file(self, tmp_path):
        """Test an explicit .env file."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("SCENESMITH_CUE_MIN_LENGTH=4\n")
        settings = ScenesmithSettings.from_multiple_sources(env_file=env_file)
        assert settings.cue_min_length == 4


class TestGlobalSettings:
    """Test the cached global settings."""

    def test_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_set_and_clear(self):
        """Test replacing and clearing the global instance."""
        custom = ScenesmithSettings(cue_max_words=9)
        set_settings(custom)
        assert get_settings() is custom
        clear_settings_cache()
        assert get_settings().cue_max_words == 5

    def test_project_config_discovered(self, tmp_path):
        """Test that scenesmith.yaml in the working directory is loaded."""
        (tmp_path / "scenesmith.yaml").write_text("prompt_max_characters: 3\n")
        clear_settings_cache()
        assert get_settings().prompt_max_characters == 3

    def test_user_config_discovered(self, tmp_path):
        """Test that the home directory config is loaded."""
        config_dir = Path.home() / ".scenesmith"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("cue_max_length: 25\n")
        clear_settings_cache()
        assert get_settings().cue_max_length == 25


class TestSettingsForCli:
    """Test get_settings_for_cli."""

    def test_overrides(self):
        """Test that CLI overrides apply to global settings."""
        settings = get_settings_for_cli(cli_overrides={"log_level": "INFO"})
        assert settings.log_level == "INFO"
        assert get_settings().log_level == "WARNING"

    def test_config_file(self, tmp_path):
        """Test an explicit config file."""
        path = tmp_path / "cli.yaml"
        path.write_text("cue_max_words: 2\n")
        settings = get_settings_for_cli(config_file=path)
        assert settings.cue_max_words == 2

    def test_missing_config_file(self, tmp_path):
        """Test that a missing explicit config file raises."""
        with pytest.raises(FileNotFoundError):
            get_settings_for_cli(config_file=tmp_path / "missing.yaml")
