"""Database models."""
from eduportal.models.db.result import LessonResult
from eduportal.models.db.session import ActiveTestSession

__all__ = [
    "ActiveTestSession",
    "LessonResult",
]
