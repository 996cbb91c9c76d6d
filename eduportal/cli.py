import argparse
import json
import logging
import sys
from pathlib import Path

from fastapi import HTTPException

from eduportal import config
from eduportal.logging_setup import setup_console_logging
from eduportal.models.domain import QuestionBankError
from eduportal.services.question_bank import parse_question_bank
from eduportal.utils import json_load, questions_path, validate_id, write_json_file

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Learning portal test engine")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=config.HOST, help="Bind address")
    serve.add_argument("--port", type=int, default=config.PORT, help="Bind port")

    validate = commands.add_parser("validate-bank", help="Check a question bank file")
    validate.add_argument("file", type=Path, help="Path to questions JSON")

    import_bank = commands.add_parser(
        "import-bank", help="Validate a question bank and install it for a lesson"
    )
    import_bank.add_argument("file", type=Path, help="Path to questions JSON")
    import_bank.add_argument("--lesson", required=True, help="Lesson identifier")
    import_bank.add_argument(
        "--force",
        action="store_true",
        help="Replace an existing question bank",
    )
    return parser.parse_args(argv)


def load_bank_file(path: Path) -> list[dict[str, object]]:
    """Parse and validate a bank file; returns normalized question payloads."""
    payload = json_load(path.read_text(encoding="utf-8"))
    questions = parse_question_bank(payload)
    return [question.to_payload() for question in questions]


def main(argv: list[str] | None = None) -> int:
    setup_console_logging(config.LOG_LEVEL)
    args = parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("eduportal.app:app", host=args.host, port=args.port)
        return 0

    try:
        questions = load_bank_file(args.file)
    except (OSError, json.JSONDecodeError, QuestionBankError) as e:
        logger.error(f"Invalid question bank {args.file}: {e}")
        return 1

    if args.command == "validate-bank":
        print(f"{args.file}: {len(questions)} questions OK")
        return 0

    try:
        lesson_id = validate_id("lesson", args.lesson)
    except HTTPException:
        logger.error(f"Invalid lesson id: {args.lesson!r}")
        return 1

    target = questions_path(lesson_id)
    if target.exists() and not args.force:
        logger.error(f"{target} already exists, use --force to replace it")
        return 1
    write_json_file(target, {"lessonId": lesson_id, "questions": questions})
    print(f"Saved {len(questions)} questions to {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
