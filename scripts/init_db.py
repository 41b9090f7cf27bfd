"""Create the gallery table in the configured database."""

from __future__ import annotations

import asyncio

from app.config.settings import get_settings
from app.db.session import create_engine
from app.errors import StoreUnavailable
from app.storage import ImageStore


async def ensure_schema(database_url: str) -> str:
    engine = create_engine(database_url)
    try:
        await ImageStore(engine).ensure_schema()
    except StoreUnavailable as exc:
        return f"❌ {database_url}: {exc}"
    finally:
        await engine.dispose()
    return f"✅ {database_url}: schema ready"


def main() -> None:
    settings = get_settings()
    print(asyncio.run(ensure_schema(settings.database_url)))


if __name__ == "__main__":
    main()
