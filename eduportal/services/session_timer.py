"""
Attempt timer.
Remaining time is always recomputed from the absolute start instant, so
suspended or throttled tabs do not drift.
"""
import logging
from typing import Callable, Optional

from eduportal.config import TEST_DURATION_SECONDS
from eduportal.utils import format_clock, now_seconds

logger = logging.getLogger(__name__)


class SessionTimer:
    """Fixed-duration countdown for one attempt."""

    def __init__(
        self,
        duration: int = TEST_DURATION_SECONDS,
        clock: Callable[[], float] = now_seconds,
        on_expire: Optional[Callable[[], None]] = None,
    ):
        self.duration = duration
        self.clock = clock
        self.on_expire = on_expire
        self.start_time: Optional[float] = None
        self._fired = False

    @property
    def running(self) -> bool:
        return self.start_time is not None

    @property
    def expired(self) -> bool:
        return self._fired

    def start(self, start_time: Optional[float] = None) -> None:
        """Start at now, or resume from a stored start instant."""
        self.start_time = self.clock() if start_time is None else start_time
        self._fired = False
        logger.info(f"Timer start: {self.duration}s, {self.remaining():.0f}s left")

    def stop(self) -> None:
        self.start_time = None

    def remaining(self, now: Optional[float] = None) -> float:
        """Seconds left; the full duration before start."""
        if self.start_time is None:
            return float(self.duration)
        if now is None:
            now = self.clock()
        return max(0.0, self.duration - (now - self.start_time))

    def remaining_time(self, now: Optional[float] = None) -> str:
        """'MM:SS' for UI."""
        return format_clock(self.remaining(now))

    def tick(self, now: Optional[float] = None) -> float:
        """Recompute remaining time; fires the expiry callback exactly once."""
        left = self.remaining(now)
        if self.running and left <= 0 and not self._fired:
            self._fired = True
            logger.warning("Test timeout!")
            if self.on_expire:
                try:
                    self.on_expire()
                except Exception:
                    # expiry not recorded; the next tick retries it
                    self._fired = False
                    raise
        return left
