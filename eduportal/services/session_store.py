"""
Durable storage of in-flight attempt snapshots.

Snapshots are keyed by (learner id, lesson id). Storage failures never
propagate: an unreadable snapshot is treated as "no saved session" and a
failed write is logged and skipped.
"""
import logging
from typing import Callable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from eduportal.database import SessionLocal
from eduportal.models.db.session import ActiveTestSession
from eduportal.models.domain import SessionState

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def load(self, learner_id: str, lesson_id: str) -> SessionState | None: ...

    def save(self, state: SessionState) -> None: ...

    def clear(self, learner_id: str, lesson_id: str) -> None: ...


def _restore(payload: object, learner_id: str, lesson_id: str) -> SessionState | None:
    state = SessionState.from_payload(payload)
    if state is None:
        logger.warning(f"Discarding malformed saved session for {learner_id}/{lesson_id}")
        return None
    if state.lesson_id != lesson_id:
        return None
    if not state.learner_id:
        state.learner_id = learner_id
    return state


class InMemorySessionStore:
    """Keeps snapshots as payload dicts, like a browser session storage."""

    def __init__(self):
        self.records: dict[tuple[str, str], dict[str, object]] = {}

    def load(self, learner_id: str, lesson_id: str) -> SessionState | None:
        payload = self.records.get((learner_id, lesson_id))
        if payload is None:
            return None
        state = _restore(payload, learner_id, lesson_id)
        if state is None:
            self.records.pop((learner_id, lesson_id), None)
        return state

    def save(self, state: SessionState) -> None:
        self.records[(state.learner_id, state.lesson_id)] = state.to_payload()

    def clear(self, learner_id: str, lesson_id: str) -> None:
        self.records.pop((learner_id, lesson_id), None)


class DatabaseSessionStore:
    """Snapshots in the active_test_sessions table."""

    def __init__(self, session_factory: Callable[[], DBSession] = SessionLocal):
        self.session_factory = session_factory

    def load(self, learner_id: str, lesson_id: str) -> SessionState | None:
        try:
            db = self.session_factory()
            try:
                row = db.get(ActiveTestSession, (learner_id, lesson_id))
                payload = row.payload if row else None
                found = row is not None
            finally:
                db.close()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read saved session {learner_id}/{lesson_id}: {e}")
            return None

        if not found:
            return None
        state = _restore(payload, learner_id, lesson_id)
        if state is None:
            self.clear(learner_id, lesson_id)
        return state

    def save(self, state: SessionState) -> None:
        try:
            db = self.session_factory()
            try:
                row = db.get(ActiveTestSession, (state.learner_id, state.lesson_id))
                if row is None:
                    row = ActiveTestSession(
                        learner_id=state.learner_id, lesson_id=state.lesson_id
                    )
                    db.add(row)
                row.payload = state.to_payload()
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
            finally:
                db.close()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to save session {state.learner_id}/{state.lesson_id}: {e}"
            )

    def clear(self, learner_id: str, lesson_id: str) -> None:
        try:
            db = self.session_factory()
            try:
                row = db.get(ActiveTestSession, (learner_id, lesson_id))
                if row is not None:
                    db.delete(row)
                    db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
            finally:
                db.close()
        except SQLAlchemyError as e:
            logger.error(f"Failed to clear session {learner_id}/{lesson_id}: {e}")
