"""Scoring utilities for schedules and existing schedule files."""

from __future__ import annotations

from pathlib import Path

from .models import Problem, Schedule, ScheduleBuilder
from .parser import load_problem
from .postprocess import text_to_schedule
from .validation import validate_schedule


class ScheduleFormatError(ValueError):
    """Raised when a schedule does not follow the expected text layout."""


def score(problem: Problem, schedule: Schedule) -> int:
    """Sum the scores of distinct books across all activations.

    A book listed by several libraries is paid out once. Raises
    `DataIntegrityError` for a book id the problem does not know.
    """
    return sum(problem.value_of(item_id) for item_id in set(schedule.claimed_items()))


def load_schedule(path: str | Path, problem: Problem) -> Schedule:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ScheduleFormatError(f"failed to read schedule from {path}: {exc}") from exc
    try:
        entries = text_to_schedule(text)
    except ValueError as exc:
        raise ScheduleFormatError(str(exc)) from exc

    sources = problem.source_lookup()
    builder = ScheduleBuilder()
    for library_id, books in entries:
        source = sources.get(library_id)
        if source is None:
            raise ScheduleFormatError(f"schedule references unknown library {library_id}")
        builder.add(source, books)
    return builder.build()


def score_schedule(problem: Problem, schedule: Schedule, *, validate: bool = False) -> int:
    if validate:
        validate_schedule(problem, schedule)
    return score(problem, schedule)


def score_from_files(
    problem_path: str | Path,
    schedule_path: str | Path,
    *,
    validate: bool = False,
) -> int:
    problem = load_problem(problem_path)
    schedule = load_schedule(schedule_path, problem)
    return score_schedule(problem, schedule, validate=validate)
