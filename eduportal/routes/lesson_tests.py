"""
Lesson test endpoints.

Handlers are sync and run in the threadpool; each one holds the service lock
for its whole transition, so transitions of the engine never interleave.
"""
from typing import Annotated, Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException

from eduportal.dependencies import Caller, get_caller, get_test_session_service
from eduportal.models import (
    AnswerRequest,
    ConfirmationRequest,
    FocusRequest,
    VisibilityRequest,
)
from eduportal.models.domain import QuestionBankError, TestStateError
from eduportal.services.test_runner import TestRunner
from eduportal.services.test_session_service import TestSessionService
from eduportal.utils import validate_id

router = APIRouter(prefix="/api/lessons/{lesson_id}", tags=["lesson-tests"])

ServiceDep = Annotated[TestSessionService, Depends(get_test_session_service)]
CallerDep = Annotated[Caller, Depends(get_caller)]

T = TypeVar("T")


def _open_runner(service: TestSessionService, caller: Caller, lesson_id: str) -> TestRunner:
    """Open the caller's runner for a lesson that has a test."""
    lesson_id = validate_id("lessonId", lesson_id)
    try:
        runner = service.open(caller.learner_id, lesson_id, caller.role)
    except QuestionBankError as e:
        raise HTTPException(status_code=400, detail=f"Invalid question bank: {e}")
    if not runner.has_test:
        raise HTTPException(status_code=404, detail="Lesson has no test")
    return runner


def _apply(action: Callable[[], T]) -> T:
    """Run an engine action, mapping engine errors to HTTP errors."""
    try:
        return action()
    except TestStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/test")
def open_test(lesson_id: str, caller: CallerDep, service: ServiceDep) -> dict[str, object]:
    """Open (or resume) the lesson test and return its view."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        return runner.view()


@router.delete("/test")
def close_test(lesson_id: str, caller: CallerDep, service: ServiceDep) -> dict[str, object]:
    """Tear down the test view; an attempt in progress stays saved."""
    lesson_id = validate_id("lessonId", lesson_id)
    closed = service.close(caller.learner_id, lesson_id)
    return {"status": "closed" if closed else "not_open", "lessonId": lesson_id}


@router.post("/test/start")
def start_test(lesson_id: str, caller: CallerDep, service: ServiceDep) -> dict[str, object]:
    """Confirm the start of an attempt; starts the timer."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        _apply(runner.confirm_start)
        return runner.view()


@router.post("/test/answer")
def answer_question(
    lesson_id: str,
    payload: AnswerRequest,
    caller: CallerDep,
    service: ServiceDep,
) -> dict[str, object]:
    """Answer the current question."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        _apply(lambda: runner.select_answer(payload.selectedIndex))
        return runner.view()


@router.post("/test/next")
def next_question(lesson_id: str, caller: CallerDep, service: ServiceDep) -> dict[str, object]:
    """Advance to the next question, or finish after the last one."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        _apply(runner.next_question)
        return runner.view()


@router.post("/test/visibility")
def visibility_changed(
    lesson_id: str,
    payload: VisibilityRequest,
    caller: CallerDep,
    service: ServiceDep,
) -> dict[str, object]:
    """Report a foreground/background transition of the test page."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        runner.visibility_changed(payload.hidden)
        return runner.view()


@router.post("/test/focus")
def focus_changed(
    lesson_id: str,
    payload: FocusRequest,
    caller: CallerDep,
    service: ServiceDep,
) -> dict[str, object]:
    """Report a window focus transition."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        runner.focus_changed(payload.focused)
        return runner.view()


@router.post("/test/warning/dismiss")
def dismiss_warning(lesson_id: str, caller: CallerDep, service: ServiceDep) -> dict[str, object]:
    """Close the tab-switch warning."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        runner.dismiss_warning()
        return runner.view()


@router.post("/test/exit")
def exit_test(
    lesson_id: str,
    payload: ConfirmationRequest,
    caller: CallerDep,
    service: ServiceDep,
) -> dict[str, object]:
    """Ask to leave the test, confirm leaving (invalidates), or cancel."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        if payload.confirm is None:
            _apply(runner.request_exit)
        elif payload.confirm:
            _apply(runner.confirm_exit)
        else:
            runner.cancel_exit()
        return runner.view()


@router.post("/test/retake")
def retake_test(
    lesson_id: str,
    payload: ConfirmationRequest,
    caller: CallerDep,
    service: ServiceDep,
) -> dict[str, object]:
    """Ask for, confirm, or cancel the retake of a finished test."""
    with service.lock:
        runner = _open_runner(service, caller, lesson_id)
        if payload.confirm is None:
            _apply(runner.request_retake)
        elif payload.confirm:
            _apply(runner.confirm_retake)
        else:
            runner.cancel_retake()
        return runner.view()


@router.get("/result")
def get_result(lesson_id: str, caller: CallerDep, service: ServiceDep) -> dict[str, object]:
    """Get the caller's stored result for the lesson."""
    lesson_id = validate_id("lessonId", lesson_id)
    result = service.load_result(caller.learner_id, lesson_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Result not found")
    return result.to_payload()
