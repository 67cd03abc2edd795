"""
Application settings.

Values come from an optional JSON file (``CLARVOY_CONFIG``) and are
overridden by individual environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from src.core.variance_engine import DEFAULT_HIGH_NOISE_THRESHOLD
from src.data.config_manager import ConfigManager

REPO_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_DATABASE_URL = "sqlite:///./clarvoy.db"

ALLOWED_ATTACHMENT_TYPES: Tuple[str, ...] = (
    "application/pdf",
    "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "image/jpeg",
    "image/jpg",
    "image/png",
)


@dataclass
class AppSettings:
    database_url: str = DEFAULT_DATABASE_URL
    database_echo: bool = False
    auto_create_tables: bool = True
    log_level: str = "INFO"

    # Judgment noise
    high_noise_threshold: float = DEFAULT_HIGH_NOISE_THRESHOLD

    # Attachments
    max_attachment_mb: int = 10
    max_extracted_text_chars: int = 50000
    allowed_attachment_types: Tuple[str, ...] = field(default_factory=lambda: ALLOWED_ATTACHMENT_TYPES)

    # Coaching
    default_provider: str = "openai"
    prompt_excerpt_chars: int = 3000


def _resolve_config_path(value: Optional[str]) -> Optional[Path]:
    if not value:
        return None
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = (REPO_ROOT / candidate).resolve()
    return candidate


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(config_path: Optional[Path] = None) -> AppSettings:
    """
    Build settings from the JSON config file and environment.

    JSON layout (all keys optional):
        {
            "database": {"url": "...", "echo": false, "auto_create_tables": true},
            "logging": {"level": "INFO"},
            "variance": {"high_noise_threshold": 2.0},
            "attachments": {"max_size_mb": 10, "max_text_chars": 50000},
            "coaching": {"default_provider": "openai", "excerpt_chars": 3000}
        }
    """
    path = config_path or _resolve_config_path(os.getenv("CLARVOY_CONFIG"))
    cfg = ConfigManager(path=path)
    defaults = AppSettings()

    settings = AppSettings(
        database_url=cfg.get("database.url", defaults.database_url),
        database_echo=bool(cfg.get("database.echo", defaults.database_echo)),
        auto_create_tables=bool(cfg.get("database.auto_create_tables", defaults.auto_create_tables)),
        log_level=str(cfg.get("logging.level", defaults.log_level)),
        high_noise_threshold=float(cfg.get("variance.high_noise_threshold", defaults.high_noise_threshold)),
        max_attachment_mb=int(cfg.get("attachments.max_size_mb", defaults.max_attachment_mb)),
        max_extracted_text_chars=int(cfg.get("attachments.max_text_chars", defaults.max_extracted_text_chars)),
        default_provider=str(cfg.get("coaching.default_provider", defaults.default_provider)),
        prompt_excerpt_chars=int(cfg.get("coaching.excerpt_chars", defaults.prompt_excerpt_chars)),
    )

    if os.getenv("CLARVOY_DATABASE_URL"):
        settings.database_url = os.environ["CLARVOY_DATABASE_URL"]
    if os.getenv("CLARVOY_HIGH_NOISE_THRESHOLD"):
        settings.high_noise_threshold = float(os.environ["CLARVOY_HIGH_NOISE_THRESHOLD"])
    if os.getenv("CLARVOY_LOG_LEVEL"):
        settings.log_level = os.environ["CLARVOY_LOG_LEVEL"].upper()
    settings.auto_create_tables = _env_bool(os.getenv("CLARVOY_AUTO_CREATE_TABLES"), settings.auto_create_tables)

    return settings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return load_settings()
