"""Command-line interface for the book scanning scheduler."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .bounds import BoundError
from .parser import ProblemFormatError, load_problem
from .postprocess import schedule_to_dict, schedule_to_text, value_by_library
from .scheduler import SCHEDULERS, IterativeScheduler, SchedulerConfig
from .solver import SolverConfig, solve_problem
from .validation import ScheduleValidationError


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def default_output_path(input_path: Path) -> Path:
    return input_path.with_name(input_path.name + ".solution.txt")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Book scanning library scheduler")
    parser.add_argument("input", help="Path to the problem file (text or JSON)")
    parser.add_argument("--output", "-o", help="Schedule file to write (default: <input>.solution.txt)")
    parser.add_argument("--output-json", help="Optional file to write activations and score JSON")
    parser.add_argument(
        "--policy",
        choices=sorted(SCHEDULERS),
        default=IterativeScheduler.name,
        help="Scheduling policy",
    )
    parser.add_argument(
        "--charge-harvest-time",
        action="store_true",
        help="Charge shipping days to the global clock as well as signup days",
    )
    parser.add_argument("--validate", action="store_true", help="Validate the produced schedule")
    parser.add_argument("--bound", action="store_true", help="Also report the LP relaxation upper bound")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for progress messages")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Input does not exist or is not a file: {input_path.resolve()}", file=sys.stderr)
        return 2

    try:
        problem = load_problem(input_path)
    except ProblemFormatError as exc:
        print(f"Failed to parse problem: {exc}", file=sys.stderr)
        return 2

    solver_config = SolverConfig(
        policy=args.policy,
        scheduler=SchedulerConfig(charge_harvest_time=args.charge_harvest_time),
        compute_bound=args.bound,
        validate=args.validate,
    )

    try:
        result = solve_problem(problem, solver_config)
    except ScheduleValidationError as exc:
        print(f"Schedule validation failed: {exc}", file=sys.stderr)
        return 3
    except BoundError as exc:
        print(f"Upper bound failed: {exc}", file=sys.stderr)
        return 4

    output_path = Path(args.output) if args.output else default_output_path(input_path)
    output_path.write_text(schedule_to_text(result.schedule), encoding="utf-8")

    if args.output_json:
        payload = schedule_to_dict(result.schedule)
        payload["score"] = result.score
        payload["policy"] = result.policy
        payload["by_library"] = value_by_library(problem, result.schedule)
        if result.upper_bound is not None:
            payload["upper_bound"] = result.upper_bound
        Path(args.output_json).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    summary = f"Scheduled {len(result.schedule)}/{len(problem.sources)} libraries | score={result.score}"
    if result.upper_bound is not None:
        summary += f" | bound={result.upper_bound:.1f}"
    print(summary, file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
