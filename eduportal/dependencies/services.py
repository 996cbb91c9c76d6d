"""Shared engine collaborators."""
from functools import lru_cache

from eduportal.services.navigation import NavigationRegistry
from eduportal.services.question_bank import JsonQuestionBank
from eduportal.services.result_sink import DatabaseResultSink
from eduportal.services.session_store import DatabaseSessionStore
from eduportal.services.test_session_service import TestSessionService


@lru_cache(maxsize=1)
def get_test_session_service() -> TestSessionService:
    """Dependency to get the process-wide test session service."""
    return TestSessionService(
        bank=JsonQuestionBank(),
        store=DatabaseSessionStore(),
        sink=DatabaseResultSink(),
        navigation=NavigationRegistry(),
    )
