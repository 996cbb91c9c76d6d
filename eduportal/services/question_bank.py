"""Read-only question banks for lesson tests."""
import logging
from pathlib import Path
from typing import Protocol

from eduportal.models.domain import Question, QuestionBankError
from eduportal.utils import questions_path, read_json_file

logger = logging.getLogger(__name__)


class QuestionBank(Protocol):
    """Ordered questions per lesson; never mutated by the engine."""

    def load_questions(self, lesson_id: str) -> list[Question]: ...


def parse_question_bank(payload: object) -> list[Question]:
    """
    Parse a bank payload: either a list of questions or {"questions": [...]}.
    Raises QuestionBankError on the first malformed question or duplicate id.
    """
    if isinstance(payload, dict):
        payload = payload.get("questions", [])
    if not isinstance(payload, list):
        raise QuestionBankError("Question bank must be a list of questions")

    questions: list[Question] = []
    seen: set[str] = set()
    for item in payload:
        question = Question.from_payload(item)
        if question.id in seen:
            raise QuestionBankError(f"Duplicate question id: {question.id}")
        seen.add(question.id)
        questions.append(question)
    return questions


class JsonQuestionBank:
    """Question bank backed by <lessons dir>/<lesson id>/questions.json."""

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = base_dir

    def path_for(self, lesson_id: str) -> Path:
        if self.base_dir is None:
            return questions_path(lesson_id)
        return self.base_dir / lesson_id / "questions.json"

    def load_questions(self, lesson_id: str) -> list[Question]:
        try:
            payload = read_json_file(self.path_for(lesson_id))
        except ValueError as exc:
            raise QuestionBankError(f"Unreadable question bank for {lesson_id}: {exc}") from exc
        if payload is None:
            return []
        questions = parse_question_bank(payload)
        logger.debug(f"Loaded {len(questions)} questions for lesson {lesson_id}")
        return questions


class InMemoryQuestionBank:
    def __init__(self, lessons: dict[str, list[Question]] | None = None):
        self.lessons = dict(lessons or {})

    def load_questions(self, lesson_id: str) -> list[Question]:
        return list(self.lessons.get(lesson_id, []))
