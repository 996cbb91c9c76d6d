"""Pydantic models."""
from eduportal.models.tests import (
    AnswerRequest,
    ConfirmationRequest,
    FocusRequest,
    VisibilityRequest,
)

__all__ = [
    "AnswerRequest",
    "ConfirmationRequest",
    "FocusRequest",
    "VisibilityRequest",
]
