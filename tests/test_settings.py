"""
Settings Tests

JSON config file layered under environment overrides.
"""

import pytest

from src.config.settings import DEFAULT_DATABASE_URL, AppSettings, load_settings

ENV_VARS = (
    "CLARVOY_CONFIG",
    "CLARVOY_DATABASE_URL",
    "CLARVOY_HIGH_NOISE_THRESHOLD",
    "CLARVOY_LOG_LEVEL",
    "CLARVOY_AUTO_CREATE_TABLES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.high_noise_threshold == 2.0
    assert settings.max_attachment_mb == 10
    assert settings.max_extracted_text_chars == 50000
    assert settings.default_provider == "openai"
    assert settings.prompt_excerpt_chars == 3000
    assert settings.auto_create_tables is True


def test_json_file(tmp_json):
    path = tmp_json(
        {
            "database": {"url": "sqlite:///./other.db", "auto_create_tables": False},
            "logging": {"level": "DEBUG"},
            "variance": {"high_noise_threshold": 1.5},
            "attachments": {"max_size_mb": 5, "max_text_chars": 1000},
            "coaching": {"default_provider": "gemini", "excerpt_chars": 500},
        }
    )
    settings = load_settings(path)
    assert settings.database_url == "sqlite:///./other.db"
    assert settings.auto_create_tables is False
    assert settings.log_level == "DEBUG"
    assert settings.high_noise_threshold == 1.5
    assert settings.max_attachment_mb == 5
    assert settings.max_extracted_text_chars == 1000
    assert settings.default_provider == "gemini"
    assert settings.prompt_excerpt_chars == 500


def test_config_path_from_env(tmp_json, monkeypatch):
    path = tmp_json({"variance": {"high_noise_threshold": 3.0}})
    monkeypatch.setenv("CLARVOY_CONFIG", str(path))
    assert load_settings().high_noise_threshold == 3.0


def test_env_overrides_file(tmp_json, monkeypatch):
    path = tmp_json({"database": {"url": "sqlite:///./file.db"}, "variance": {"high_noise_threshold": 1.5}})
    monkeypatch.setenv("CLARVOY_DATABASE_URL", "postgresql://db/clarvoy")
    monkeypatch.setenv("CLARVOY_HIGH_NOISE_THRESHOLD", "2.5")
    monkeypatch.setenv("CLARVOY_LOG_LEVEL", "warning")
    monkeypatch.setenv("CLARVOY_AUTO_CREATE_TABLES", "0")

    settings = load_settings(path)
    assert settings.database_url == "postgresql://db/clarvoy"
    assert settings.high_noise_threshold == 2.5
    assert settings.log_level == "WARNING"
    assert settings.auto_create_tables is False


def test_dataclass_defaults_match_loader():
    assert load_settings() == AppSettings()
