"""Test layered configuration loading."""
from __future__ import annotations

import json

import pytest

from core.config import (
    PROJECT_ROOT,
    Settings,
    _resolve_database_url,
    load_settings,
    settings_files,
)
from core.exceptions import ConfigurationError

LAYERED_KEYS = ("JWT_ISSUER", "JWT_AUDIENCE", "LOG_LEVEL", "AUTO_MIGRATE")


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Empty settings directory, with the layered keys cleared from the environment."""
    monkeypatch.setenv("FLIGHTBOOK_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("ENVIRONMENT", "Staging")
    for key in LAYERED_KEYS:
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def _write(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


def test_defaults_without_files(config_dir):
    settings = Settings()

    assert settings.environment == "Staging"
    assert settings.jwt_issuer == "flightbook"
    assert settings.jwt_audience == "flightbook-api"
    assert settings.auto_migrate is True
    assert settings.require_https is True


def test_base_file_applies(config_dir):
    _write(config_dir / "appsettings.json", {"JWT_ISSUER": "base", "LOG_LEVEL": "warning"})

    settings = Settings()

    assert settings.jwt_issuer == "base"
    assert settings.log_level == "WARNING"


def test_environment_file_overrides_base(config_dir):
    _write(config_dir / "appsettings.json", {"JWT_ISSUER": "base", "LOG_LEVEL": "WARNING"})
    _write(config_dir / "appsettings.Staging.json", {"JWT_ISSUER": "staging"})
    _write(config_dir / "appsettings.Production.json", {"JWT_ISSUER": "production"})

    settings = Settings()

    assert settings.jwt_issuer == "staging"
    assert settings.log_level == "WARNING"


def test_environment_variable_overrides_files(config_dir, monkeypatch):
    _write(config_dir / "appsettings.json", {"JWT_ISSUER": "base"})
    _write(config_dir / "appsettings.Staging.json", {"JWT_ISSUER": "staging"})
    monkeypatch.setenv("JWT_ISSUER", "from-env")

    assert Settings().jwt_issuer == "from-env"


def test_dotenv_ignored_outside_development(config_dir):
    (config_dir / ".env").write_text("JWT_AUDIENCE=from-dotenv\n", encoding="utf-8")

    assert Settings().jwt_audience == "flightbook-api"


def test_dotenv_applies_in_development(config_dir, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Development")
    _write(config_dir / "appsettings.json", {"JWT_AUDIENCE": "base", "JWT_ISSUER": "base"})
    (config_dir / ".env").write_text("JWT_AUDIENCE=from-dotenv\n", encoding="utf-8")

    settings = Settings()

    assert settings.is_development()
    assert settings.jwt_audience == "from-dotenv"
    assert settings.jwt_issuer == "base"


def test_environment_variable_overrides_dotenv(config_dir, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Development")
    monkeypatch.setenv("JWT_AUDIENCE", "from-env")
    (config_dir / ".env").write_text("JWT_AUDIENCE=from-dotenv\n", encoding="utf-8")

    assert Settings().jwt_audience == "from-env"


def test_malformed_file_raises(config_dir):
    (config_dir / "appsettings.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings()


def test_invalid_value_raises(config_dir):
    _write(config_dir / "appsettings.json", {"LOG_LEVEL": "LOUD"})

    with pytest.raises(ConfigurationError):
        load_settings()


def test_settings_files_order(tmp_path):
    assert settings_files("Staging", tmp_path) == [
        tmp_path / "appsettings.json",
        tmp_path / "appsettings.Staging.json",
    ]


def test_allowed_origins_parsing():
    settings = Settings(ALLOWED_ORIGINS="https://a.example, https://b.example,")
    assert settings.get_allowed_origins() == ["https://a.example", "https://b.example"]


def test_relative_sqlite_path_is_absolute():
    assert _resolve_database_url("sqlite:///./data/fb.db") == (
        f"sqlite:///{(PROJECT_ROOT / 'data' / 'fb.db').as_posix()}"
    )
    assert _resolve_database_url("sqlite:///:memory:") == "sqlite:///:memory:"
    assert _resolve_database_url("postgresql://db/flightbook") == "postgresql://db/flightbook"
