"""Gate for a second attempt."""
import logging
from collections.abc import Sequence

from eduportal.config import MAX_ATTEMPTS
from eduportal.models.domain import RetakeNotAllowed, TestAttempt, TestStateError

logger = logging.getLogger(__name__)


class RetakeController:
    """
    Retake needs an explicit confirmation because it consumes the last
    allowed attempt. Confirming bumps the seed so the new attempt gets a new
    deterministic shuffle.
    """

    def __init__(self, max_attempts: int = MAX_ATTEMPTS):
        self.max_attempts = max_attempts
        self.pending = False

    def can_retake(self, history: Sequence[TestAttempt]) -> bool:
        return len(history) < self.max_attempts

    def request(self, history: Sequence[TestAttempt]) -> None:
        if not self.can_retake(history):
            raise RetakeNotAllowed(
                f"All {self.max_attempts} attempts have been used"
            )
        self.pending = True

    def cancel(self) -> None:
        self.pending = False

    def confirm(self, history: Sequence[TestAttempt], seed: int) -> int:
        """Consume the pending confirmation; returns the seed of the next attempt."""
        if not self.pending:
            raise TestStateError("Retake was not requested")
        self.pending = False
        if not self.can_retake(history):
            raise RetakeNotAllowed(
                f"All {self.max_attempts} attempts have been used"
            )
        logger.info(f"Retake confirmed, attempt {len(history) + 1} of {self.max_attempts}")
        return seed + 1
