"""
Durable snapshot of an in-flight test attempt, one row per learner and lesson.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eduportal.database import Base
from eduportal.utils import compact_json_dump, json_load


class ActiveTestSession(Base):
    """Saved state of a started, not yet finalized attempt."""

    __tablename__ = "active_test_sessions"

    learner_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    lesson_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # SessionState payload (stored as JSON string)
    payload_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def payload(self) -> dict[str, Any] | None:
        """Parse snapshot from JSON."""
        if not self.payload_json:
            return None
        try:
            data = json_load(self.payload_json)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    @payload.setter
    def payload(self, value: dict[str, Any] | None) -> None:
        """Serialize snapshot to JSON."""
        self.payload_json = compact_json_dump(value) if value else None

    def __repr__(self) -> str:
        return f"<ActiveTestSession(learner_id='{self.learner_id}', lesson_id='{self.lesson_id}')>"
