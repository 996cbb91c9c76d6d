"""Caller identity for lesson test endpoints."""
from dataclasses import dataclass
from typing import Annotated

from fastapi import Header, HTTPException, status

from eduportal.models.domain import Role
from eduportal.utils import validate_id


@dataclass(frozen=True)
class Caller:
    learner_id: str
    role: Role


async def get_caller(
    x_learner_id: Annotated[str | None, Header()] = None,
    x_role: Annotated[str | None, Header()] = None,
) -> Caller:
    """Resolve the calling learner from the shell's headers.

    Raises:
        HTTPException: 401 without a learner id, 400 for an unknown role.
    """
    if not x_learner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    learner_id = validate_id("learnerId", x_learner_id)

    try:
        role = Role((x_role or Role.LEARNER.value).strip().lower())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid role")

    return Caller(learner_id=learner_id, role=role)
