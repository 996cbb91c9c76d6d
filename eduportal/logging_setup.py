from __future__ import annotations
import logging

# Libraries that are too chatty at the engine's INFO level
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_console_logging(level: int | str = logging.INFO) -> None:
    """
    Call once at app or CLI start. Prints engine logs (attempt started,
    violations, results saved, storage failures) to the console.
    """
    level = _resolve_level(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        # already configured by uvicorn or pytest
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
