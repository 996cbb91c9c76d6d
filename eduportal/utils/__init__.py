"""Utility modules."""
from eduportal.utils.json_utils import (
    compact_json_dump,
    json_dump,
    json_load,
    read_json_file,
    write_json_file,
)
from eduportal.utils.paths import lesson_dir, questions_path
from eduportal.utils.time_utils import format_clock, now_seconds, to_epoch_ms
from eduportal.utils.validation import validate_id

__all__ = [
    "compact_json_dump",
    "json_dump",
    "json_load",
    "read_json_file",
    "write_json_file",
    "lesson_dir",
    "questions_path",
    "format_clock",
    "now_seconds",
    "to_epoch_ms",
    "validate_id",
]
