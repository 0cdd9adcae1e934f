"""Input parsing for the book scanning instances."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence, Tuple

from .models import Problem, Source


class ProblemFormatError(ValueError):
    """Raised when an input file cannot be parsed."""


def _lines_from_text(raw_text: str) -> List[Tuple[int, List[str]]]:
    lines = [(number, line.split()) for number, line in enumerate(raw_text.splitlines(), start=1) if line.strip()]
    if not lines:
        raise ProblemFormatError("input is empty; expected problem definition")
    return lines


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise ProblemFormatError(f"expected integer for {what}, got {token!r}") from exc


def _build_source(source_id: int, item_count: int, setup: int, throughput: int, items: Sequence[int], item_total: int) -> Source:
    if item_count < 0 or setup < 0:
        raise ProblemFormatError(f"library {source_id} has negative book count or signup time")
    if throughput <= 0:
        raise ProblemFormatError(f"library {source_id} ships {throughput} books per day; expected a positive rate")
    if len(items) != item_count:
        raise ProblemFormatError(f"library {source_id} declares {item_count} books but lists {len(items)}")
    for item_id in items:
        if not 0 <= item_id < item_total:
            raise ProblemFormatError(f"library {source_id} references unknown book {item_id}")
    # Holdings are a set in the puzzle; keep first occurrence order.
    unique_items = tuple(dict.fromkeys(items))
    return Source(
        source_id=source_id,
        item_count=item_count,
        setup=setup,
        throughput=throughput,
        items=unique_items,
    )


def _parse_from_lines(lines: Sequence[Tuple[int, List[str]]]) -> Problem:
    pointer = 0

    def next_line(expected: int, what: str) -> List[int]:
        """Consume one non-blank line holding exactly `expected` integers."""
        nonlocal pointer
        if expected == 0:
            # An empty list is written as a blank line, which is skipped.
            return []
        if pointer >= len(lines):
            raise ProblemFormatError(f"unexpected end of input while reading {what}")
        number, tokens = lines[pointer]
        pointer += 1
        if len(tokens) != expected:
            raise ProblemFormatError(f"line {number}: expected {expected} values for {what}, got {len(tokens)}")
        return [_to_int(token, f"{what} on line {number}") for token in tokens]

    item_total, source_total, deadline = next_line(3, "the header")
    if item_total < 0 or source_total < 0 or deadline < 0:
        raise ProblemFormatError("header values must be non-negative")

    values = next_line(item_total, "book scores")
    for item_id, value in enumerate(values):
        if value < 0:
            raise ProblemFormatError(f"book {item_id} has negative score {value}")

    sources: List[Source] = []
    for source_id in range(source_total):
        item_count, setup, throughput = next_line(3, f"library {source_id} stats")
        if item_count < 0:
            raise ProblemFormatError(f"library {source_id} has negative book count")
        items = next_line(item_count, f"library {source_id} books")
        sources.append(_build_source(source_id, item_count, setup, throughput, items, item_total))

    if pointer != len(lines):
        raise ProblemFormatError(f"line {lines[pointer][0]}: unexpected trailing content")

    return Problem(item_values=tuple(values), sources=tuple(sources), deadline=deadline)


def parse_problem_from_text(raw_text: str) -> Problem:
    """Parse either whitespace-delimited text or JSON definitions."""
    stripped = raw_text.lstrip()
    if not stripped:
        raise ProblemFormatError("input is empty; expected problem definition")
    if stripped[0] == "{":
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ProblemFormatError(f"invalid JSON problem: {exc}") from exc
        return _parse_from_json(payload)
    return _parse_from_lines(_lines_from_text(raw_text))


def _parse_from_json(payload: dict) -> Problem:
    try:
        deadline = int(payload["deadline"])
        values = [int(value) for value in payload["item_values"]]
        source_payloads = payload["sources"]
    except KeyError as exc:
        raise ProblemFormatError(f"missing required field: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ProblemFormatError(f"invalid field value: {exc}") from exc

    if deadline < 0 or any(value < 0 for value in values):
        raise ProblemFormatError("deadline and book scores must be non-negative")

    sources: List[Source] = []
    for source_id, item in enumerate(source_payloads):
        try:
            items = [int(book) for book in item["items"]]
            sources.append(
                _build_source(
                    source_id,
                    len(items),
                    int(item["setup"]),
                    int(item["throughput"]),
                    items,
                    len(values),
                )
            )
        except ProblemFormatError:
            raise
        except KeyError as exc:
            raise ProblemFormatError(f"library {source_id} is missing field {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise ProblemFormatError(f"library {source_id} has an invalid field: {exc}") from exc

    return Problem(item_values=tuple(values), sources=tuple(sources), deadline=deadline)


def load_problem(path: str | Path) -> Problem:
    """Load a problem definition from `path` or raise `ProblemFormatError`."""
    raw_text = Path(path).read_text(encoding="utf-8")
    return parse_problem_from_text(raw_text)
