"""Turns live answer state into an immutable attempt and a stored result."""
import logging
from collections.abc import Sequence
from typing import Callable, Optional

from eduportal.models.domain import InvalidReason, QuestionAnswer, TestAttempt, TestResult
from eduportal.services.navigation import NavigationLatch
from eduportal.services.result_sink import ResultSink
from eduportal.services.session_store import SessionStore
from eduportal.utils import now_seconds, to_epoch_ms

logger = logging.getLogger(__name__)


class AttemptFinalizer:
    """
    Finalizes exactly one attempt.

    The first finalize() call builds the attempt, appends it to the prior
    history, hands the result to the sink, clears the saved session and
    releases the navigation guard. Later calls return the same result and do
    nothing else.
    """

    def __init__(
        self,
        learner_id: str,
        lesson_id: str,
        *,
        sink: ResultSink,
        store: SessionStore,
        prior_history: Sequence[TestAttempt] = (),
        navigation: Optional[NavigationLatch] = None,
        clock: Callable[[], float] = now_seconds,
    ):
        self.learner_id = learner_id
        self.lesson_id = lesson_id
        self.sink = sink
        self.store = store
        self.prior_history = tuple(prior_history)
        self.navigation = navigation
        self.clock = clock
        self.result: Optional[TestResult] = None

    def finalize(
        self,
        answers: Sequence[QuestionAnswer],
        total: int,
        reason: Optional[InvalidReason] = None,
    ) -> TestResult:
        if self.result is not None:
            logger.debug(f"Attempt for {self.learner_id}/{self.lesson_id} already finalized")
            return self.result

        timestamp = to_epoch_ms(self.clock())
        if reason is None:
            attempt = TestAttempt.scored(answers, total, timestamp)
        else:
            kept = () if reason is InvalidReason.PAGE_REFRESH else answers
            attempt = TestAttempt.invalidated_attempt(reason, total, timestamp, kept)

        result = TestResult(self.prior_history + (attempt,))
        self.sink.save_result(self.learner_id, self.lesson_id, result)
        self.result = result
        self.store.clear(self.learner_id, self.lesson_id)
        if self.navigation:
            self.navigation.release(always=True)

        if attempt.invalidated:
            logger.info(
                f"Attempt {result.attempts} for {self.learner_id}/{self.lesson_id} "
                f"invalidated: {attempt.invalid_reason.value}"
            )
        else:
            logger.info(
                f"Attempt {result.attempts} for {self.learner_id}/{self.lesson_id} finished: "
                f"{attempt.score}/{attempt.total} ({attempt.percentage}%), "
                f"{'passed' if attempt.passed else 'failed'}"
            )
        return result
