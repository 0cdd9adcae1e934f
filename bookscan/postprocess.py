"""Schedule utilities: scoring and formatting."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import Problem, Schedule


def text_to_schedule(text: str) -> List[Tuple[int, List[int]]]:
    """Parse an output file into `(library_id, books)` pairs."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise ValueError("schedule is empty; expected library count on the first line")

    try:
        library_count = int(lines[0])
    except ValueError as exc:
        raise ValueError(f"invalid library count line: {lines[0]!r}") from exc

    entries: List[Tuple[int, List[int]]] = []
    index = 1
    for _ in range(library_count):
        if index >= len(lines):
            raise ValueError("unexpected end of schedule while reading libraries")
        header = lines[index].split()
        index += 1
        if len(header) != 2:
            raise ValueError(f"invalid library header line: {lines[index - 1]!r}")
        library_id = int(header[0])
        book_count = int(header[1])
        books: List[int] = []
        if book_count > 0:
            if index >= len(lines):
                raise ValueError(f"library {library_id} is missing its book line")
            books = [int(token) for token in lines[index].split()]
            index += 1
        if len(books) != book_count:
            raise ValueError(f"library {library_id} declares {book_count} books but lists {len(books)}")
        entries.append((library_id, books))

    if index != len(lines):
        raise ValueError(f"unexpected trailing lines in schedule: {lines[index]!r}")
    return entries


def schedule_to_text(schedule: Schedule) -> str:
    lines: List[str] = [str(len(schedule))]
    for activation in schedule:
        lines.append(f"{activation.source_id} {len(activation.items)}")
        lines.append(" ".join(str(item_id) for item_id in activation.items))
    return "\n".join(lines) + "\n"


def schedule_to_dict(schedule: Schedule) -> dict:
    return {
        "activations": [
            {
                "library_id": activation.source_id,
                "books": list(activation.items),
            }
            for activation in schedule
        ]
    }


def value_by_library(problem: Problem, schedule: Schedule) -> Dict[int, int]:
    """Score credited to each activation, books paid to the first claimant."""
    seen: set[int] = set()
    credited: Dict[int, int] = {}
    for activation in schedule:
        gained = 0
        for item_id in activation.items:
            if item_id in seen:
                continue
            seen.add(item_id)
            gained += problem.value_of(item_id)
        credited[activation.source_id] = gained
    return credited
