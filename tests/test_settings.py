"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from app.config.settings import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("DATABASE_URL", "IMAGE_WIDTH", "IMAGE_HEIGHT", "LATEST_COUNT", "ANTIFORGERY_SECRET"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.database_url == "sqlite+aiosqlite:///./data/gallery.db"
    assert (settings.image_width, settings.image_height) == (60, 60)
    assert settings.latest_count == 5
    assert settings.antiforgery_secret == ""


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IMAGE_WIDTH", "120")
    monkeypatch.setenv("IMAGE_HEIGHT", "80")
    monkeypatch.setenv("LATEST_COUNT", "9")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")

    settings = get_settings()

    assert (settings.image_width, settings.image_height) == (120, 80)
    assert settings.latest_count == 9
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"


def test_env_file_fills_unset_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JPEG_QUALITY", raising=False)
    (tmp_path / ".env").write_text("# comment\nJPEG_QUALITY=90\n", encoding="utf-8")

    assert get_settings().jpeg_quality == 90
