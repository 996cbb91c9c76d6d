"""Identifier checks for learner and lesson ids."""
import re

from fastapi import HTTPException

# Same limit as the String(64) key columns of the session and result tables
ID_MAX_LENGTH = 64
_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._@-]*$")


def validate_id(name: str, value: str) -> str:
    """
    Strip and check an id that is used as a lesson directory name and as a
    table key.

    Raises:
        HTTPException: 400 when empty, too long or not a plain name.
    """
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if len(cleaned) > ID_MAX_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"{name} is longer than {ID_MAX_LENGTH} characters",
        )
    if not _ID_PATTERN.match(cleaned) or ".." in cleaned:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned
