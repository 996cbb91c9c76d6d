"""API routes."""
from eduportal.routes import lesson_tests, navigation

__all__ = ["lesson_tests", "navigation"]
