"""Time utilities."""
import time


def now_seconds() -> float:
    """Current wall clock as epoch seconds."""
    return time.time()


def to_epoch_ms(seconds: float) -> int:
    """Convert epoch seconds to integer epoch milliseconds."""
    return int(round(seconds * 1000))


def format_clock(seconds: float) -> str:
    """Format a duration as MM:SS."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"
