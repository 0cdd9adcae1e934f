"""Legality checks for schedules according to the puzzle rules."""

from __future__ import annotations

from typing import Dict, Set

from .models import Problem, Schedule


class ScheduleValidationError(ValueError):
    """Raised when a schedule violates the puzzle rules."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ScheduleValidationError(message)


def validate_schedule(
    problem: Problem,
    schedule: Schedule,
    *,
    check_capacity: bool = True,
    allow_shared_items: bool = True,
) -> None:
    """Validate puzzle rules and raise `ScheduleValidationError` on failure.

    Signups happen one after another; a library ships from the day its
    signup ends until the deadline. With `check_capacity` each activation
    must fit in that window.
    """
    sources = problem.source_lookup()
    deadline = problem.deadline

    seen_sources: Set[int] = set()
    claimed_by: Dict[int, int] = {}
    signup_end = 0

    for activation in schedule:
        source_id = activation.source_id
        source = sources.get(source_id)
        _require(source is not None, f"schedule references unknown library {source_id}")
        _require(source == activation.source, f"library {source_id} does not match the problem definition")
        _require(source_id not in seen_sources, f"library {source_id} is signed up more than once")
        seen_sources.add(source_id)

        held = set(source.items)
        shipped: Set[int] = set()
        for item_id in activation.items:
            _require(item_id in held, f"library {source_id} ships book {item_id} it does not hold")
            _require(item_id not in shipped, f"library {source_id} ships book {item_id} twice")
            shipped.add(item_id)
            if not allow_shared_items:
                _require(
                    item_id not in claimed_by,
                    f"book {item_id} shipped by library {source_id} was already claimed by library {claimed_by.get(item_id)}",
                )
            claimed_by.setdefault(item_id, source_id)

        signup_end += source.setup
        _require(
            signup_end <= deadline,
            f"signup of library {source_id} ends on day {signup_end}, after the deadline {deadline}",
        )
        if check_capacity:
            capacity = max(0, (deadline - signup_end) * source.throughput)
            _require(
                len(activation.items) <= capacity,
                f"library {source_id} ships {len(activation.items)} books but can ship at most {capacity}",
            )
