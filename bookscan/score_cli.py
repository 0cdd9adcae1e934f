"""CLI wrapper to score and validate existing schedules."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .models import DataIntegrityError
from .parser import ProblemFormatError, load_problem
from .postprocess import schedule_to_dict, value_by_library
from .scorer import ScheduleFormatError, load_schedule, score_schedule
from .validation import ScheduleValidationError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Score and validate an existing schedule file.")
    parser.add_argument("--input", "-i", required=True, help="Path to the problem definition (text or JSON)")
    parser.add_argument("--schedule", "-s", required=True, help="Path to the schedule file")
    parser.add_argument("--validate", action="store_true", help="Run puzzle rule validation")
    parser.add_argument("--output-json", help="Optional path to write score + activations JSON")
    args = parser.parse_args(argv)

    try:
        problem = load_problem(args.input)
    except (OSError, ProblemFormatError) as exc:
        print(f"Failed to parse problem: {exc}", file=sys.stderr)
        return 2

    try:
        schedule = load_schedule(args.schedule, problem)
    except ScheduleFormatError as exc:
        print(f"Failed to parse schedule: {exc}", file=sys.stderr)
        return 2

    try:
        total = score_schedule(problem, schedule, validate=args.validate)
    except (ScheduleValidationError, DataIntegrityError) as exc:
        print(f"Validation failed: {exc}", file=sys.stderr)
        return 3

    print(f"Score: {total}")

    if args.output_json:
        payload = schedule_to_dict(schedule)
        payload["score"] = total
        payload["by_library"] = value_by_library(problem, schedule)
        Path(args.output_json).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
