"""Custom exception hierarchy for SceneSmith with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScenesmithError(Exception):
    """Base exception with helpful formatting for all SceneSmith errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScenesmithError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScenesmithError):
    """Fountain file parsing errors including unreadable or undecodable input."""

    pass


class ScenesmithFileNotFoundError(ScenesmithError):
    """File not found errors with helpful path information."""

    pass


class ValidationError(ScenesmithError):
    """Input validation errors with details about what was expected."""

    pass


class EnrichmentError(ScenesmithError):
    """Errors applying character enrichment at the caller boundary."""

    pass


def check_file_path(path: Any, kind: str = "file") -> None:
    """Check that an input path exists and is a regular file.

    Args:
        path: Path to check
        kind: Human-readable description used in the message

    Raises:
        ScenesmithFileNotFoundError: With hints about the missing path
    """
    from pathlib import Path

    candidate = Path(path) if path else None
    if candidate is None or not candidate.exists():
        raise ScenesmithFileNotFoundError(
            message=f"{kind.capitalize()} not found: {path}",
            hint="Check the path spelling or use an absolute path",
            details={
                "searched_path": str(path) if path else "None",
                "current_dir": str(Path.cwd()),
            },
        )
    if not candidate.is_file():
        raise ScenesmithFileNotFoundError(
            message=f"{kind.capitalize()} is not a regular file: {path}",
            hint="Pass a file path, not a directory",
            details={"searched_path": str(path)},
        )


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "max_dialogue_excerpts": "evidence_max_dialogue_excerpts",
        "max_action_mentions": "evidence_max_action_mentions",
        "max_characters": "prompt_max_characters",
        "max_words": "cue_max_words",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
