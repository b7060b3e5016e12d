"""Dynamic catalog store model."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class CatalogEntry(Base):
    """
    A practice item added through the admin tools.
    Rows are scoped to an application/tenant id and a test type.
    """

    __tablename__ = "catalog_items"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: uuid.uuid4().hex
    )
    app_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    test_type: Mapped[str] = mapped_column(String(32), index=True, nullable=False)

    # Payload
    path: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    original_link: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    active: Mapped[bool] = mapped_column(default=True, nullable=False)
    created_by: Mapped[int | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    # Insertion order within a test type; assigned by the catalog admin
    position: Mapped[int] = mapped_column(default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<CatalogEntry(id='{self.id}', test_type='{self.test_type}')>"
