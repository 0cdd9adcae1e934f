from __future__ import annotations

from pathlib import Path

import pytest

from bookscan.models import Problem, Source

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "examples"


def build_problem(values, sources, deadline):
    """`sources` is a list of (setup, throughput, items) tuples."""
    return Problem(
        item_values=tuple(values),
        sources=tuple(
            Source(
                source_id=index,
                item_count=len(items),
                setup=setup,
                throughput=throughput,
                items=tuple(items),
            )
            for index, (setup, throughput, items) in enumerate(sources)
        ),
        deadline=deadline,
    )


@pytest.fixture
def make_problem():
    return build_problem


@pytest.fixture
def example_path() -> Path:
    return EXAMPLES_DIR / "a_example.txt"


@pytest.fixture
def example_output_path() -> Path:
    return EXAMPLES_DIR / "a_example.out"
