from __future__ import annotations

import json

import pytest

from bookscan.parser import ProblemFormatError, load_problem, parse_problem_from_text


def test_blank_lines_are_ignored():
    text = "\n3 2 4\n\n1 2 3\n\n2 1 1\n0 2\n\n1 2 2\n1\n\n"
    problem = parse_problem_from_text(text)
    assert problem.item_values == (1, 2, 3)
    assert [source.source_id for source in problem.sources] == [0, 1]
    assert problem.sources[0].items == (0, 2)
    assert problem.sources[1].setup == 2
    assert problem.sources[1].throughput == 2


def test_duplicate_holdings_are_collapsed():
    problem = parse_problem_from_text("3 1 5\n1 1 1\n4 1 1\n2 0 2 1\n")
    source = problem.sources[0]
    assert source.items == (2, 0, 1)
    assert source.item_count == 4


def test_json_definition():
    payload = {
        "deadline": 3,
        "item_values": [4, 5],
        "sources": [{"setup": 1, "throughput": 2, "items": [1, 0]}],
    }
    problem = parse_problem_from_text(json.dumps(payload))
    assert problem.deadline == 3
    assert problem.sources[0].items == (1, 0)
    assert problem.sources[0].item_count == 2


def test_load_problem_from_file(tmp_path):
    path = tmp_path / "tiny.txt"
    path.write_text("1 1 1\n7\n1 0 1\n0\n", encoding="utf-8")
    problem = load_problem(path)
    assert problem.value_of(0) == 7


@pytest.mark.parametrize(
    "text",
    [
        "",
        "3 1 5\n1 2\n",
        "2 1 5\n1 2\n1 1 1\n0\n9\n",
        "2 1 5\n1 x\n1 1 1\n0\n",
        "2 1 5\n1 2\n1 1 1\n4\n",
        "2 1 5\n1 2\n1 1 0\n0\n",
        "2 1 5\n1 -2\n1 1 1\n0\n",
        "2 1 5\n1\n1 1 1 2\n0\n",
        "2 1 5\n1 2\n1 1 1\n0 1\n",
        "1 0 5\n3\n\n\n4\n",
        '{"deadline": 3, "item_values": [1]}',
        '{"deadline": 3, "item_values": [1], "sources": [{"setup": 1, "items": [0]}]}',
        "{not json",
    ],
    ids=[
        "empty",
        "truncated",
        "trailing",
        "non-numeric",
        "unknown-book",
        "zero-rate",
        "negative-score",
        "short-scores-line",
        "long-books-line",
        "trailing-line",
        "json-missing-sources",
        "json-missing-throughput",
        "json-broken",
    ],
)
def test_malformed_input_raises(text):
    with pytest.raises(ProblemFormatError):
        parse_problem_from_text(text)


def test_mismatch_reports_line_number():
    with pytest.raises(ProblemFormatError, match="line 4"):
        parse_problem_from_text("2 1 5\n1 2\n\n1 1\n0\n")


def test_empty_library_has_no_books_line():
    problem = parse_problem_from_text("1 2 5\n4\n0 2 1\n1 1 1\n0\n")
    assert problem.sources[0].items == ()
    assert problem.sources[1].items == (0,)
