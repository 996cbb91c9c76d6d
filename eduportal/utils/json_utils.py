"""JSON helpers for question bank files and stored payloads."""
import json
import os
import tempfile
from pathlib import Path


def json_dump(payload: object) -> str:
    """Indented JSON for files edited by hand, such as question banks."""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def compact_json_dump(payload: object) -> str:
    """Compact JSON for database columns."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def json_load(data: str | bytes) -> object:
    return json.loads(data)


def read_json_file(path: Path, default: object = None) -> object:
    """Parse a UTF-8 JSON file; default when the file does not exist."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default
    return json_load(raw)


def write_json_file(path: Path, payload: object) -> None:
    """Replace a JSON file in one step; readers see the old or the new bank."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(json_dump(payload))
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
