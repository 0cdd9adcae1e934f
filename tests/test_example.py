from __future__ import annotations

from bookscan.parser import load_problem
from bookscan.postprocess import schedule_to_text
from bookscan.scheduler import IterativeScheduler, OnePassScheduler
from bookscan.scorer import score, score_from_files
from bookscan.solver import SolverConfig, solve_problem
from bookscan.validation import validate_schedule


def test_parser_reads_example(example_path):
    problem = load_problem(example_path)
    assert problem.item_total == 6
    assert len(problem.sources) == 2
    assert problem.deadline == 7
    assert problem.sources[1].items == (3, 2, 5, 0)
    assert problem.sources[0].full_harvest_duration == 5


def test_example_iterative_claims_every_book(example_path):
    problem = load_problem(example_path)
    schedule = IterativeScheduler().schedule(problem)
    assert [(a.source_id, list(a.items)) for a in schedule] == [(0, [3, 4, 2, 1, 0]), (1, [5])]
    assert score(problem, schedule) == 21
    validate_schedule(problem, schedule, allow_shared_items=False)


def test_example_one_pass_skips_late_library(example_path):
    problem = load_problem(example_path)
    schedule = OnePassScheduler().schedule(problem)
    assert [(a.source_id, list(a.items)) for a in schedule] == [(0, [0, 1, 2, 3, 4])]
    assert score(problem, schedule) == 17


def test_example_output_matches_reference(example_path, example_output_path):
    result = solve_problem(load_problem(example_path), SolverConfig(validate=True))
    assert schedule_to_text(result.schedule) == example_output_path.read_text(encoding="utf-8")


def test_scoring_existing_output(example_path, example_output_path):
    assert score_from_files(example_path, example_output_path, validate=True) == 21
