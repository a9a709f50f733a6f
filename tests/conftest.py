"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from scenesmith.config import reset_settings
from scenesmith.models import Character

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "fountain"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from user config files and SCENESMITH_ variables."""
    for var in [k for k in os.environ if k.startswith("SCENESMITH_")]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample Fountain files."""
    return FIXTURES_DIR


@pytest.fixture
def coffee_shop_path() -> Path:
    """Three-scene screenplay with a title page and transitions."""
    return FIXTURES_DIR / "coffee_shop.fountain"


@pytest.fixture
def coffee_shop_text(coffee_shop_path) -> str:
    """Text of the three-scene screenplay."""
    return coffee_shop_path.read_text(encoding="utf-8")


@pytest.fixture
def characters() -> list[Character]:
    """Character records for the sample screenplay."""
    return [
        Character(id="char-1", name="JOHN", occupation="Accountant"),
        Character(id="char-2", name="SARAH"),
        Character(
            id="char-3",
            name="MIKE",
            personality="Quiet",
            relationships={"char-1": "Brother"},
        ),
    ]
