"""SQLAlchemy models describing the gallery tables."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, LargeBinary, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for ORM models."""


class ImageRecord(Base):
    """Uploaded image, stored after normalisation."""

    __tablename__ = "Images"

    id: Mapped[str] = mapped_column("Id", Text, primary_key=True)
    title: Mapped[str] = mapped_column("Title", Text, nullable=False)
    image_data: Mapped[bytes] = mapped_column("ImageData", LargeBinary, nullable=False)
    content_type: Mapped[str] = mapped_column("ContentType", Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "CreatedAt",
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )
