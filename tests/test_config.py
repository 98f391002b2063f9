"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from jersey_store.core.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.PORT == 3000
    assert settings.DATABASE_URL.startswith("sqlite")
    assert settings.REQUEST_TIMEOUT_SECONDS > 0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test port, database and log level come from the environment."""
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    settings = Settings(_env_file=None)

    assert settings.PORT == 8080
    assert settings.DATABASE_URL == "sqlite:///./other.db"
    assert settings.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_must_be_positive(timeout: float) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, REQUEST_TIMEOUT_SECONDS=timeout)
