from typing import Callable

import pytest

from eduportal.database import create_db_engine, create_session_factory, init_db
from eduportal.models.domain import Question
from eduportal.services.result_sink import InMemoryResultSink
from eduportal.services.session_store import InMemorySessionStore
from eduportal.services.test_runner import TestRunner
from helpers import FakeClock, make_questions


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def questions() -> list[Question]:
    return make_questions(30)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def sink() -> InMemoryResultSink:
    return InMemoryResultSink()


@pytest.fixture
def guard_calls() -> list[bool]:
    return []


@pytest.fixture
def make_runner(
    questions: list[Question],
    store: InMemorySessionStore,
    sink: InMemoryResultSink,
    clock: FakeClock,
    guard_calls: list[bool],
) -> Callable[..., TestRunner]:
    def factory(**overrides) -> TestRunner:
        options = {
            "store": store,
            "sink": sink,
            "clock": clock,
            "navigation_guard": guard_calls.append,
            "seed": 7,
        }
        options.update(overrides)
        bank = options.pop("questions", questions)
        return TestRunner("lesson-1", "learner-1", bank, **options)

    return factory


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()

