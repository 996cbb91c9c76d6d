"""Persistence of finalized lesson test results."""
import logging
from typing import Callable, Protocol

from sqlalchemy.orm import Session as DBSession

from eduportal.database import SessionLocal
from eduportal.models.db.result import LessonResult
from eduportal.models.domain import TestResult

logger = logging.getLogger(__name__)


class ResultSink(Protocol):
    """Stores one TestResult per (learner, lesson); last write wins."""

    def save_result(self, learner_id: str, lesson_id: str, result: TestResult) -> None: ...

    def load_result(self, learner_id: str, lesson_id: str) -> TestResult | None: ...


class InMemoryResultSink:
    def __init__(self):
        self.results: dict[tuple[str, str], TestResult] = {}
        self.saved: list[tuple[str, str, TestResult]] = []

    def save_result(self, learner_id: str, lesson_id: str, result: TestResult) -> None:
        self.results[(learner_id, lesson_id)] = result
        self.saved.append((learner_id, lesson_id, result))

    def load_result(self, learner_id: str, lesson_id: str) -> TestResult | None:
        return self.results.get((learner_id, lesson_id))


class DatabaseResultSink:
    """Results in the lesson_results table."""

    def __init__(self, session_factory: Callable[[], DBSession] = SessionLocal):
        self.session_factory = session_factory

    def save_result(self, learner_id: str, lesson_id: str, result: TestResult) -> None:
        latest = result.latest
        db = self.session_factory()
        try:
            row = db.get(LessonResult, (learner_id, lesson_id))
            if row is None:
                row = LessonResult(learner_id=learner_id, lesson_id=lesson_id)
                db.add(row)
            row.attempts = result.attempts
            row.score = latest.score
            row.total = latest.total
            row.percentage = latest.percentage
            row.passed = latest.passed
            row.invalidated = latest.invalidated
            row.result = result.to_payload()
            db.commit()
        finally:
            db.close()
        logger.info(
            f"Saved result for {learner_id}/{lesson_id}: "
            f"{latest.score}/{latest.total} ({latest.percentage}%), attempt {result.attempts}"
        )

    def load_result(self, learner_id: str, lesson_id: str) -> TestResult | None:
        db = self.session_factory()
        try:
            row = db.get(LessonResult, (learner_id, lesson_id))
            payload = row.result if row else None
        finally:
            db.close()
        return TestResult.from_payload(payload) if payload else None
