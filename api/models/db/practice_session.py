"""
Practice session log model.
Each row is one completed test attempt and is never updated after insert.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.database import Base

if TYPE_CHECKING:
    from api.models.db.user import User


class PracticeSession(Base):
    """
    Completed test attempt.
    Responses and item ids are parallel lists stored as JSON.
    """

    __tablename__ = "practice_sessions"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: uuid.uuid4().hex
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    test_type: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    responses_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    item_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    # Scored tests (OIR) report score/total; psychology tests may carry feedback
    score: Mapped[int | None] = mapped_column(nullable=True)
    total: Mapped[int | None] = mapped_column(nullable=True)
    ai_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="practice_sessions")

    @property
    def responses(self) -> list[str]:
        """Parse responses from JSON."""
        try:
            return json.loads(self.responses_json or "[]")
        except (json.JSONDecodeError, TypeError):
            return []

    @responses.setter
    def responses(self, value: list[str]) -> None:
        """Serialize responses to JSON."""
        self.responses_json = json.dumps(list(value), ensure_ascii=False)

    @property
    def item_ids(self) -> list[str]:
        """Parse item ids from JSON."""
        try:
            return json.loads(self.item_ids_json or "[]")
        except (json.JSONDecodeError, TypeError):
            return []

    @item_ids.setter
    def item_ids(self, value: list[str]) -> None:
        """Serialize item ids to JSON."""
        self.item_ids_json = json.dumps(list(value), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<PracticeSession(id='{self.id}', user_id={self.user_id}, test_type='{self.test_type}')>"
