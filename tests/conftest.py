"""Shared fixtures for gallery tests."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.session import create_engine
from app.storage import ImageStore
from tests.images import make_image_bytes


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG", (800, 600))


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(sqlite_url(tmp_path / "gallery.db"))
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def store(engine: AsyncEngine) -> ImageStore:
    store = ImageStore(engine)
    await store.ensure_schema()
    return store
