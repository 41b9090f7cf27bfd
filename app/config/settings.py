"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/gallery.db"

    image_width: int = 60
    image_height: int = 60
    jpeg_quality: int = 75
    latest_count: int = 5
    max_upload_bytes: int = 10 * 1024 * 1024

    antiforgery_secret: str = ""


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/gallery.db"),
        image_width=int(os.getenv("IMAGE_WIDTH", "60")),
        image_height=int(os.getenv("IMAGE_HEIGHT", "60")),
        jpeg_quality=int(os.getenv("JPEG_QUALITY", "75")),
        latest_count=int(os.getenv("LATEST_COUNT", "5")),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
        antiforgery_secret=os.getenv("ANTIFORGERY_SECRET", ""),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
