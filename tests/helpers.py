from eduportal.models.domain import Question
from eduportal.services.test_runner import TestRunner

T0 = 1_700_000_000.0


class FakeClock:
    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_questions(count: int, prefix: str = "q") -> list[Question]:
    return [
        Question(
            id=f"{prefix}{index}",
            text=f"Question {index}?",
            options=("A", "B", "C", "D"),
            correct_answer_index=index % 4,
        )
        for index in range(1, count + 1)
    ]


def answer_current(runner: TestRunner, correct: bool) -> None:
    """Answer the current question right or wrong, then advance."""
    question = runner.current_question
    index = question.correct_answer_index
    if not correct:
        index = (index + 1) % len(question.options)
    runner.select_answer(index)
    runner.next_question()
