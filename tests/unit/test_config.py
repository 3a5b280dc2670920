import pytest

from event_seating import config
from event_seating.config import DEFAULT_DATABASE_URL, load_settings


ENV_VARS = (
    "DATABASE_URL",
    "DB_CONNECT_MAX_RETRIES",
    "DB_CONNECT_RETRY_DELAY",
    "SWEEPER_INTERVAL_SECONDS",
    "SWEEPER_ENABLED",
    "LOG_LEVEL",
    "HOST",
    "PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.db_connect_max_retries == 30
    assert settings.db_connect_retry_delay == 1.5
    assert settings.sweeper_interval_seconds == 60.0
    assert settings.sweeper_enabled is True
    assert settings.log_level == "INFO"
    assert settings.port == 8000


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./seating.db")
    monkeypatch.setenv("SWEEPER_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("SWEEPER_ENABLED", "false")
    monkeypatch.setenv("DB_CONNECT_MAX_RETRIES", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.database_url == "sqlite:///./seating.db"
    assert settings.sweeper_interval_seconds == 5.0
    assert settings.sweeper_enabled is False
    assert settings.db_connect_max_retries == 3
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["0", "-1", "soon"])
def test_rejects_bad_sweeper_interval(monkeypatch, value):
    monkeypatch.setenv("SWEEPER_INTERVAL_SECONDS", value)

    with pytest.raises(ValueError):
        load_settings()


def test_rejects_unknown_boolean(monkeypatch):
    monkeypatch.setenv("SWEEPER_ENABLED", "maybe")

    with pytest.raises(ValueError):
        load_settings()
