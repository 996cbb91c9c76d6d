"""
Tab-switch monitoring during an active attempt.

Signals (page visibility, window focus, ...) report suspicion to one
IntegrityMonitor, which owns the violation count. A violation is counted when
the learner goes away; the warning is shown when they come back. Several
signals firing for the same departure count once.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from eduportal.config import MAX_VIOLATIONS
from eduportal.models.domain import InvalidReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViolationWarning:
    violation_count: int
    remaining_allowance: int

    def to_payload(self) -> dict[str, int]:
        return {
            "violationCount": self.violation_count,
            "remainingAllowance": self.remaining_allowance,
        }


class SuspicionListener(Protocol):
    def on_suspect(self, source: str) -> None: ...

    def on_return(self, source: str) -> None: ...


class ProctoringSignal:
    """Base class for environment signals that can flag the learner as away."""

    name = "signal"

    def __init__(self, listener: SuspicionListener):
        self.listener = listener
        self.suspect = False

    def reset(self) -> None:
        self.suspect = False

    def on_suspect(self) -> None:
        if self.suspect:
            return
        self.suspect = True
        self.listener.on_suspect(self.name)

    def on_clear(self) -> None:
        if not self.suspect:
            return
        self.suspect = False
        self.listener.on_return(self.name)


class VisibilitySignal(ProctoringSignal):
    """Page visibility: hidden means the learner switched tabs or minimized."""

    name = "visibility"

    def update(self, hidden: bool) -> None:
        if hidden:
            self.on_suspect()
        else:
            self.on_clear()


class FocusSignal(ProctoringSignal):
    """Window focus: blur means another window took the foreground."""

    name = "focus"

    def update(self, focused: bool) -> None:
        if focused:
            self.on_clear()
        else:
            self.on_suspect()


class IntegrityMonitor:
    """Counts violations and invalidates the attempt past the allowance."""

    def __init__(
        self,
        max_violations: int = MAX_VIOLATIONS,
        on_limit_exceeded: Optional[Callable[[InvalidReason], None]] = None,
    ):
        self.max_violations = max_violations
        self.on_limit_exceeded = on_limit_exceeded
        self.active = False
        self.violation_count = 0
        self.pending_warning: Optional[ViolationWarning] = None
        self._away: set[str] = set()
        self._armed = False
        self._tripped = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False
        self._away.clear()
        self._armed = False

    def reset(self) -> None:
        self.deactivate()
        self.violation_count = 0
        self.pending_warning = None
        self._tripped = False

    @property
    def remaining_allowance(self) -> int:
        return max(0, self.max_violations - self.violation_count)

    @property
    def limit_exceeded(self) -> bool:
        return self.violation_count > self.max_violations

    def on_suspect(self, source: str) -> None:
        if not self.active or source in self._away:
            return
        already_away = bool(self._away)
        self._away.add(source)
        if already_away:
            return

        self.violation_count += 1
        self._armed = True
        logger.info(f"Left test view ({source}), violation {self.violation_count}")

        if self.limit_exceeded and not self._tripped:
            self._tripped = True
            self.pending_warning = None
            logger.warning(
                f"Violation limit exceeded ({self.violation_count} > {self.max_violations})"
            )
            if self.on_limit_exceeded:
                try:
                    self.on_limit_exceeded(InvalidReason.TAB_SWITCH)
                except Exception:
                    self._tripped = False
                    raise

    def on_return(self, source: str) -> None:
        if not self.active:
            return
        self._away.discard(source)
        if self._away or not self._armed:
            return
        self._armed = False
        if 1 <= self.violation_count <= self.max_violations:
            self.pending_warning = ViolationWarning(
                violation_count=self.violation_count,
                remaining_allowance=self.remaining_allowance,
            )

    def dismiss_warning(self) -> None:
        self.pending_warning = None
