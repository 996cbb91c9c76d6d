"""Path utilities for lessons."""
from pathlib import Path

from eduportal import config


def lesson_dir(lesson_id: str) -> Path:
    """Get directory for lesson."""
    return config.LESSONS_DIR / lesson_id


def questions_path(lesson_id: str) -> Path:
    """Get path to lesson question bank JSON."""
    return lesson_dir(lesson_id) / "questions.json"
