"""
Domain types of the timed test engine.

Questions and finished attempts are immutable; the in-flight SessionState is
the only mutable record and is what gets snapshotted to the session store.
Payload helpers use the camelCase keys the portal front end stores.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any

from eduportal.config import MAX_TEST_QUESTIONS, PASS_PERCENTAGE


class QuestionBankError(ValueError):
    """Raised when a question bank payload cannot be parsed."""


class TestStateError(Exception):
    """Operation not allowed in the current attempt state."""

    __test__ = False


class RetakeNotAllowed(TestStateError):
    """All allowed attempts are used."""


class Role(str, enum.Enum):
    """Caller role for a lesson test."""

    LEARNER = "learner"
    ADMIN = "admin"


class InvalidReason(str, enum.Enum):
    """Why an attempt was invalidated."""

    TAB_SWITCH = "tab-switch"
    USER_EXIT = "user-exit"
    PAGE_REFRESH = "page-refresh"


def percentage_of(score: int, total: int) -> int:
    """Percentage rounded half up; 0 for an empty question set."""
    if total <= 0:
        return 0
    return int(math.floor(score * 100 / total + 0.5))


def is_passing(percentage: int) -> bool:
    return percentage >= PASS_PERCENTAGE


def _as_int(value: object, default: int | None = None) -> int | None:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return default


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: tuple[str, ...]
    correct_answer_index: int

    @classmethod
    def from_payload(cls, data: object) -> Question:
        if not isinstance(data, dict):
            raise QuestionBankError("Question must be an object")
        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)) or raw_id == "":
            raise QuestionBankError("Question id is required")
        question_id = str(raw_id)
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise QuestionBankError(f"Question {question_id}: text is required")
        options = data.get("options")
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise QuestionBankError(f"Question {question_id}: options must be strings")
        if len(options) < 4:
            raise QuestionBankError(f"Question {question_id}: at least 4 options required")
        correct = _as_int(data.get("correctAnswerIndex"))
        if correct is None or not 0 <= correct < len(options):
            raise QuestionBankError(
                f"Question {question_id}: correctAnswerIndex out of range"
            )
        return cls(
            id=question_id,
            text=text,
            options=tuple(options),
            correct_answer_index=correct,
        )

    def to_payload(self, include_answer: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "options": list(self.options),
        }
        if include_answer:
            payload["correctAnswerIndex"] = self.correct_answer_index
        return payload


@dataclass(frozen=True)
class QuestionAnswer:
    question_id: str
    selected_index: int
    is_correct: bool

    @classmethod
    def for_question(cls, question: Question, selected_index: int) -> QuestionAnswer:
        return cls(
            question_id=question.id,
            selected_index=selected_index,
            is_correct=selected_index == question.correct_answer_index,
        )

    @classmethod
    def from_payload(cls, data: object) -> QuestionAnswer | None:
        """Parse a stored answer; None when malformed."""
        if not isinstance(data, dict):
            return None
        question_id = data.get("questionId")
        selected = _as_int(data.get("selectedIndex"))
        is_correct = data.get("isCorrect")
        if question_id is None or selected is None or not isinstance(is_correct, bool):
            return None
        return cls(str(question_id), selected, is_correct)

    def to_payload(self) -> dict[str, Any]:
        return {
            "questionId": self.question_id,
            "selectedIndex": self.selected_index,
            "isCorrect": self.is_correct,
        }


def _parse_answers(raw: object) -> tuple[QuestionAnswer, ...]:
    if not isinstance(raw, list):
        return ()
    parsed = (QuestionAnswer.from_payload(item) for item in raw)
    return tuple(answer for answer in parsed if answer is not None)


@dataclass(frozen=True)
class TestAttempt:
    """One finished pass through a question set."""

    __test__ = False

    score: int
    total: int
    percentage: int
    passed: bool
    timestamp: int
    answers: tuple[QuestionAnswer, ...] = ()
    invalidated: bool = False
    invalid_reason: InvalidReason | None = None

    @classmethod
    def scored(
        cls,
        answers: list[QuestionAnswer] | tuple[QuestionAnswer, ...],
        total: int,
        timestamp: int,
    ) -> TestAttempt:
        score = min(sum(1 for answer in answers if answer.is_correct), total)
        percentage = percentage_of(score, total)
        return cls(
            score=score,
            total=total,
            percentage=percentage,
            passed=is_passing(percentage),
            timestamp=timestamp,
            answers=tuple(answers),
        )

    @classmethod
    def invalidated_attempt(
        cls,
        reason: InvalidReason,
        total: int,
        timestamp: int,
        answers: list[QuestionAnswer] | tuple[QuestionAnswer, ...] = (),
    ) -> TestAttempt:
        return cls(
            score=0,
            total=total,
            percentage=0,
            passed=False,
            timestamp=timestamp,
            answers=tuple(answers),
            invalidated=True,
            invalid_reason=reason,
        )

    @classmethod
    def from_payload(cls, data: object) -> TestAttempt | None:
        if not isinstance(data, dict):
            return None
        total = _as_int(data.get("total"), 0)
        score = _as_int(data.get("score"), 0)
        timestamp = _as_int(data.get("timestamp"), 0)
        score = max(0, min(score, total))
        reason = None
        raw_reason = data.get("invalidReason")
        if raw_reason is not None:
            try:
                reason = InvalidReason(raw_reason)
            except ValueError:
                reason = None
        invalidated = bool(data.get("invalidated")) or reason is not None
        percentage = percentage_of(score, total)
        return cls(
            score=score,
            total=total,
            percentage=percentage,
            passed=is_passing(percentage) and not invalidated,
            timestamp=timestamp,
            answers=_parse_answers(data.get("answers")),
            invalidated=invalidated,
            invalid_reason=reason,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "score": self.score,
            "total": self.total,
            "percentage": self.percentage,
            "passed": self.passed,
            "timestamp": self.timestamp,
            "answers": [answer.to_payload() for answer in self.answers],
        }
        if self.invalidated:
            payload["invalidated"] = True
            payload["invalidReason"] = (
                self.invalid_reason.value if self.invalid_reason else None
            )
        return payload


@dataclass(frozen=True)
class TestResult:
    """
    Aggregate of all attempts of one learner at one lesson test.

    The top-level fields mirror the latest attempt.
    """

    __test__ = False

    attempts_history: tuple[TestAttempt, ...]

    def __post_init__(self) -> None:
        if not self.attempts_history:
            raise ValueError("TestResult requires at least one attempt")

    @property
    def latest(self) -> TestAttempt:
        return self.attempts_history[-1]

    @property
    def attempts(self) -> int:
        return len(self.attempts_history)

    def with_attempt(self, attempt: TestAttempt) -> TestResult:
        return TestResult(self.attempts_history + (attempt,))

    @classmethod
    def from_payload(cls, data: object) -> TestResult | None:
        """
        Parse a stored result.

        Results written before attempt history was tracked carry only the
        top-level attempt fields; they are read as a single-attempt history.
        """
        if not isinstance(data, dict):
            return None
        history_raw = data.get("attemptsHistory")
        history: tuple[TestAttempt, ...] = ()
        if isinstance(history_raw, list) and history_raw:
            parsed = (TestAttempt.from_payload(item) for item in history_raw)
            history = tuple(attempt for attempt in parsed if attempt is not None)
        if not history:
            legacy = TestAttempt.from_payload(data)
            if legacy is None or "total" not in data:
                return None
            history = (legacy,)
        return cls(history)

    def to_payload(self) -> dict[str, Any]:
        return {
            **self.latest.to_payload(),
            "attempts": self.attempts,
            "attemptsHistory": [attempt.to_payload() for attempt in self.attempts_history],
        }


@dataclass
class SessionState:
    """Persisted snapshot of one in-flight attempt."""

    lesson_id: str
    learner_id: str
    start_time: float
    seed: int
    question_ids: list[str] = field(default_factory=list)
    answer_map: dict[str, QuestionAnswer] = field(default_factory=dict)
    current_question_index: int = 0
    correct_answers_count: int = 0
    total_questions: int = 0

    @classmethod
    def from_payload(cls, data: object) -> SessionState | None:
        """
        Rebuild a snapshot, defaulting what is missing.

        Returns None only when the snapshot has no lesson or start instant.
        """
        if not isinstance(data, dict):
            return None
        lesson_id = data.get("lessonId")
        start_ms = data.get("startTime")
        if not isinstance(lesson_id, str) or not lesson_id:
            return None
        if isinstance(start_ms, bool) or not isinstance(start_ms, (int, float)):
            return None

        learner_id = data.get("learnerId")
        seed = _as_int(data.get("seed"), 0)

        raw_ids = data.get("questionIds")
        question_ids = (
            [str(item) for item in raw_ids] if isinstance(raw_ids, list) else []
        )

        answer_map: dict[str, QuestionAnswer] = {}
        raw_answers = data.get("answerMap")
        if isinstance(raw_answers, dict):
            for key, item in raw_answers.items():
                answer = QuestionAnswer.from_payload(item)
                if answer is not None:
                    answer_map[str(key)] = answer

        total = _as_int(data.get("totalQuestions"), 0)
        if total <= 0:
            total = len(question_ids) or MAX_TEST_QUESTIONS

        index = _as_int(data.get("currentQuestionIndex"), 0)
        index = max(0, min(index, total - 1))

        correct = _as_int(data.get("correctAnswersCount"))
        if correct is None or correct < 0:
            correct = sum(1 for answer in answer_map.values() if answer.is_correct)

        return cls(
            lesson_id=lesson_id,
            learner_id=str(learner_id) if learner_id is not None else "",
            start_time=start_ms / 1000,
            seed=seed,
            question_ids=question_ids,
            answer_map=answer_map,
            current_question_index=index,
            correct_answers_count=min(correct, total),
            total_questions=total,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "lessonId": self.lesson_id,
            "learnerId": self.learner_id,
            "startTime": int(round(self.start_time * 1000)),
            "seed": self.seed,
            "questionIds": list(self.question_ids),
            "answerMap": {
                key: answer.to_payload() for key, answer in self.answer_map.items()
            },
            "currentQuestionIndex": self.current_question_index,
            "correctAnswersCount": self.correct_answers_count,
            "totalQuestions": self.total_questions,
        }
