import pytest

from eduportal.models.domain import InvalidReason
from eduportal.services.integrity_monitor import (
    FocusSignal,
    IntegrityMonitor,
    VisibilitySignal,
)


def _monitor() -> tuple[IntegrityMonitor, list[InvalidReason]]:
    reasons: list[InvalidReason] = []
    monitor = IntegrityMonitor(3, on_limit_exceeded=reasons.append)
    monitor.activate()
    return monitor, reasons


def test_warning_on_return_with_remaining_allowance() -> None:
    monitor, reasons = _monitor()
    visibility = VisibilitySignal(monitor)

    visibility.update(hidden=True)
    assert monitor.violation_count == 1
    assert monitor.pending_warning is None

    visibility.update(hidden=False)
    assert monitor.pending_warning.violation_count == 1
    assert monitor.pending_warning.remaining_allowance == 2

    monitor.dismiss_warning()
    assert monitor.pending_warning is None
    assert reasons == []


def test_fourth_departure_invalidates_once() -> None:
    monitor, reasons = _monitor()
    visibility = VisibilitySignal(monitor)

    for _ in range(3):
        visibility.update(hidden=True)
        visibility.update(hidden=False)
    assert monitor.pending_warning.remaining_allowance == 0
    assert reasons == []

    visibility.update(hidden=True)
    assert monitor.violation_count == 4
    assert reasons == [InvalidReason.TAB_SWITCH]

    visibility.update(hidden=False)
    visibility.update(hidden=True)
    assert reasons == [InvalidReason.TAB_SWITCH]


def test_signals_for_one_departure_count_once() -> None:
    monitor, _ = _monitor()
    visibility = VisibilitySignal(monitor)
    focus = FocusSignal(monitor)

    focus.update(focused=False)
    visibility.update(hidden=True)
    assert monitor.violation_count == 1

    visibility.update(hidden=False)
    assert monitor.pending_warning is None
    focus.update(focused=True)
    assert monitor.pending_warning.violation_count == 1


def test_repeated_hidden_events_are_one_departure() -> None:
    monitor, _ = _monitor()
    visibility = VisibilitySignal(monitor)
    visibility.update(hidden=True)
    visibility.update(hidden=True)
    assert monitor.violation_count == 1


def test_inactive_monitor_ignores_signals() -> None:
    reasons: list[InvalidReason] = []
    monitor = IntegrityMonitor(3, on_limit_exceeded=reasons.append)
    visibility = VisibilitySignal(monitor)
    for _ in range(5):
        visibility.update(hidden=True)
        visibility.update(hidden=False)
    assert monitor.violation_count == 0
    assert reasons == []


def test_failed_invalidation_keeps_limit_exceeded() -> None:
    attempts: list[InvalidReason] = []

    def on_limit(reason: InvalidReason) -> None:
        attempts.append(reason)
        if len(attempts) == 1:
            raise RuntimeError("result not saved")

    monitor = IntegrityMonitor(3, on_limit_exceeded=on_limit)
    monitor.activate()
    for _ in range(3):
        monitor.on_suspect("visibility")
        monitor.on_return("visibility")
    with pytest.raises(RuntimeError):
        monitor.on_suspect("visibility")
    assert monitor.limit_exceeded

    monitor.on_return("visibility")
    monitor.on_suspect("visibility")
    assert attempts == [InvalidReason.TAB_SWITCH, InvalidReason.TAB_SWITCH]
