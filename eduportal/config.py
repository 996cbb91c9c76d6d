"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Directories
LESSONS_DIR = Path(os.environ.get("LESSONS_DIR", Path.cwd() / "data" / "lessons"))
LESSONS_DIR.mkdir(parents=True, exist_ok=True)

# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'eduportal.db'}"
)

# Test attempt rules
TEST_DURATION_SECONDS = 20 * 60
MAX_TEST_QUESTIONS = 20
MAX_ATTEMPTS = 2
MAX_VIOLATIONS = 3
PASS_PERCENTAGE = 50

# Live test views kept in memory; the least recently used are torn down
MAX_LIVE_RUNNERS = _parse_int_env("MAX_LIVE_RUNNERS", 1000)

# Server
HOST = os.environ.get("EDUPORTAL_HOST", "127.0.0.1")
PORT = _parse_int_env("EDUPORTAL_PORT", 8000)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
