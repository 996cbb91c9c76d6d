"""FastAPI dependencies."""
from eduportal.dependencies.caller import Caller, get_caller
from eduportal.dependencies.services import get_test_session_service

__all__ = ["Caller", "get_caller", "get_test_session_service"]
