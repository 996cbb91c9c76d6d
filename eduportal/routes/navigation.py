"""Navigation guard state for the host shell."""
from typing import Annotated

from fastapi import APIRouter, Depends

from eduportal.dependencies import Caller, get_caller, get_test_session_service
from eduportal.services.test_session_service import TestSessionService

router = APIRouter(prefix="/api/navigation", tags=["navigation"])


@router.get("")
def navigation_state(
    caller: Annotated[Caller, Depends(get_caller)],
    service: Annotated[TestSessionService, Depends(get_test_session_service)],
) -> dict[str, object]:
    """Whether navigation and logout must be blocked for the caller."""
    return {
        "learnerId": caller.learner_id,
        "testInProgress": service.navigation.is_in_progress(caller.learner_id),
        "lessons": service.navigation.active_lessons(caller.learner_id),
    }
