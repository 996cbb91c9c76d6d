"""
"Test in progress" notifications for the host shell.

While a learner has a running attempt the shell blocks navigation and logout.
"""
import logging
from typing import Callable

logger = logging.getLogger(__name__)

NavigationGuard = Callable[[bool], None]


class NavigationLatch:
    """Tells a guard True once on engage and False once on release."""

    def __init__(self, guard: NavigationGuard | None = None):
        self.guard = guard
        self.engaged = False

    def engage(self) -> None:
        if self.engaged:
            return
        self.engaged = True
        if self.guard:
            self.guard(True)

    def release(self, always: bool = False) -> None:
        """Report False; unless always, only after an engage."""
        if not self.engaged and not always:
            return
        self.engaged = False
        if self.guard:
            self.guard(False)


class NavigationRegistry:
    """Per-learner set of lessons with a test in progress."""

    def __init__(self):
        self._active: dict[str, set[str]] = {}

    def guard_for(self, learner_id: str, lesson_id: str) -> NavigationGuard:
        def guard(in_progress: bool) -> None:
            lessons = self._active.setdefault(learner_id, set())
            if in_progress:
                lessons.add(lesson_id)
            else:
                lessons.discard(lesson_id)
                if not lessons:
                    self._active.pop(learner_id, None)
            logger.debug(f"Test in progress for {learner_id}/{lesson_id}: {in_progress}")

        return guard

    def is_in_progress(self, learner_id: str) -> bool:
        return bool(self._active.get(learner_id))

    def active_lessons(self, learner_id: str) -> list[str]:
        return sorted(self._active.get(learner_id, ()))
