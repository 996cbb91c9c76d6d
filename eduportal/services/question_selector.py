"""
Question selection for one attempt.

The learner's subset and order are a pure function of (lesson id, seed): a
seeded PRNG drives a Fisher-Yates shuffle, so the same attempt always sees the
same questions in the same order, across reloads and restarts.
"""
import logging
import random
from collections.abc import Sequence

from eduportal.config import MAX_TEST_QUESTIONS
from eduportal.models.domain import Question, Role

logger = logging.getLogger(__name__)


def shuffle_key(lesson_id: str, seed: int) -> str:
    """PRNG seed material for an attempt ordering."""
    return f"{lesson_id}:{seed}"


def select_questions(
    questions: Sequence[Question],
    lesson_id: str,
    seed: int,
    role: Role = Role.LEARNER,
    limit: int = MAX_TEST_QUESTIONS,
) -> list[Question]:
    """
    Pick the question set of an attempt.

    Administrators preview the whole bank in its original order. Learners get
    min(limit, len(questions)) questions without replacement.
    """
    if not questions:
        return []
    if role is Role.ADMIN:
        return list(questions)

    ordered = list(questions)
    # random.Random.shuffle is Fisher-Yates; str seeds are hashed deterministically
    random.Random(shuffle_key(lesson_id, seed)).shuffle(ordered)
    return ordered[:limit]


def restore_questions(
    questions: Sequence[Question],
    question_ids: Sequence[str],
    lesson_id: str,
    seed: int,
    limit: int = MAX_TEST_QUESTIONS,
) -> list[Question]:
    """
    Rebuild a saved attempt's question set from its persisted order.

    Falls back to recomputing from (lesson id, seed) when the saved order is
    missing or names questions no longer in the bank.
    """
    by_id = {question.id: question for question in questions}
    if question_ids and all(question_id in by_id for question_id in question_ids):
        return [by_id[question_id] for question_id in question_ids]

    if question_ids:
        logger.warning(
            f"Saved question order for lesson {lesson_id} references unknown "
            f"questions, reselecting from seed {seed}"
        )
    return select_questions(questions, lesson_id, seed, Role.LEARNER, limit)
