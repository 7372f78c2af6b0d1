from __future__ import annotations

from pydantic import ValidationError
import pytest

from aurimyth.atomic_kit.config import AtomicKitConfig, DatabaseSettings, LogSettings, UpsertSettings


def test_defaults() -> None:
    settings = UpsertSettings()

    assert settings.max_attempts == 3
    assert settings.retry_backoff == 0.0
    assert DatabaseSettings().isolation_level is None
    assert LogSettings().level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPSERT_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = AtomicKitConfig()

    assert config.upsert.max_attempts == 5
    assert config.database.url == "sqlite+aiosqlite:///:memory:"
    assert config.log.level == "DEBUG"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("read_committed", "READ COMMITTED"),
        ("Repeatable Read", "REPEATABLE READ"),
        ("SERIALIZABLE", "SERIALIZABLE"),
    ],
)
def test_isolation_level_is_normalized(value: str, expected: str) -> None:
    assert DatabaseSettings(isolation_level=value).isolation_level == expected


@pytest.mark.parametrize("value", ["READ UNCOMMITTED", "read_uncommitted", "autocommit"])
def test_unsafe_isolation_level_is_rejected(value: str) -> None:
    with pytest.raises(ValidationError):
        DatabaseSettings(isolation_level=value)


def test_attempt_budget_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        UpsertSettings(max_attempts=0)
