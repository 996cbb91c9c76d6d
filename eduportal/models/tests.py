"""Lesson test request models."""
from pydantic import BaseModel, Field


class AnswerRequest(BaseModel):
    """Model for answering the current question."""

    selectedIndex: int = Field(..., ge=0)


class VisibilityRequest(BaseModel):
    """Model for a foreground/background transition."""

    hidden: bool


class FocusRequest(BaseModel):
    """Model for a window focus transition."""

    focused: bool


class ConfirmationRequest(BaseModel):
    """
    Model for two-step actions (exit, retake).
    Omitted confirm asks for confirmation, true confirms, false cancels.
    """

    confirm: bool | None = None
