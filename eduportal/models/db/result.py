"""
Lesson test result rows: the latest TestResult per learner and lesson.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eduportal.database import Base
from eduportal.utils import compact_json_dump, json_load


class LessonResult(Base):
    """
    Test result record.
    Overwritten on every finalized attempt; the history lives in the JSON.
    """

    __tablename__ = "lesson_results"

    learner_id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    lesson_id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)

    # Latest attempt summary
    attempts: Mapped[int] = mapped_column(default=0, nullable=False)
    score: Mapped[int] = mapped_column(default=0, nullable=False)
    total: Mapped[int] = mapped_column(default=0, nullable=False)
    percentage: Mapped[int] = mapped_column(default=0, nullable=False)
    passed: Mapped[bool] = mapped_column(default=False, nullable=False)
    invalidated: Mapped[bool] = mapped_column(default=False, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Full TestResult payload (stored as JSON string)
    result_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def result(self) -> dict[str, Any] | None:
        """Parse result payload from JSON."""
        if not self.result_json:
            return None
        try:
            data = json_load(self.result_json)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    @result.setter
    def result(self, value: dict[str, Any] | None) -> None:
        """Serialize result payload to JSON."""
        self.result_json = compact_json_dump(value) if value else None
