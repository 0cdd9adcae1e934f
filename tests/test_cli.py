from __future__ import annotations

import json
import random
import shutil

import pytest

from bookscan.batch import run_batch
from bookscan.cli import main as cli_main
from bookscan.generator import generate_cases, generate_instance, problem_to_text
from bookscan.parser import load_problem, parse_problem_from_text
from bookscan.score_cli import main as score_main


@pytest.fixture
def workspace_input(tmp_path, example_path):
    target = tmp_path / "a_example.txt"
    shutil.copy(example_path, target)
    return target


def test_cli_writes_solution_next_to_input(workspace_input, example_output_path, capsys):
    exit_code = cli_main([str(workspace_input)])
    assert exit_code == 0
    written = workspace_input.with_name("a_example.txt.solution.txt")
    assert written.read_text(encoding="utf-8") == example_output_path.read_text(encoding="utf-8")
    assert "score=21" in capsys.readouterr().err


def test_cli_one_pass_with_json(workspace_input, tmp_path):
    output = tmp_path / "out.txt"
    output_json = tmp_path / "out.json"
    exit_code = cli_main(
        [
            str(workspace_input),
            "--policy",
            "one-pass",
            "--output",
            str(output),
            "--output-json",
            str(output_json),
            "--validate",
        ]
    )
    assert exit_code == 0
    assert output.read_text(encoding="utf-8") == "1\n0 5\n0 1 2 3 4\n"
    payload = json.loads(output_json.read_text(encoding="utf-8"))
    assert payload["score"] == 17
    assert payload["policy"] == "one-pass"
    assert payload["activations"] == [{"library_id": 0, "books": [0, 1, 2, 3, 4]}]


def test_cli_reports_upper_bound(workspace_input, capsys):
    assert cli_main([str(workspace_input), "--bound"]) == 0
    assert "bound=21.0" in capsys.readouterr().err


def test_cli_missing_input(tmp_path, capsys):
    assert cli_main([str(tmp_path / "missing.txt")]) == 2
    assert "does not exist" in capsys.readouterr().err


def test_cli_requires_exactly_one_input():
    with pytest.raises(SystemExit) as excinfo:
        cli_main([])
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit):
        cli_main(["a.txt", "b.txt"])


def test_cli_rejects_malformed_input(tmp_path, capsys):
    broken = tmp_path / "broken.txt"
    broken.write_text("2 1 5\n1\n", encoding="utf-8")
    assert cli_main([str(broken)]) == 2
    assert "Failed to parse problem" in capsys.readouterr().err


def test_score_cli_reports_score(example_path, example_output_path, capsys):
    exit_code = score_main(
        [
            "--input",
            str(example_path),
            "--schedule",
            str(example_output_path),
            "--validate",
        ]
    )
    assert exit_code == 0
    assert "Score: 21" in capsys.readouterr().out


def test_score_cli_flags_illegal_schedule(example_path, tmp_path, capsys):
    schedule = tmp_path / "bad.out"
    schedule.write_text("2\n0 1\n3\n0 1\n4\n", encoding="utf-8")
    assert score_main(["-i", str(example_path), "-s", str(schedule), "--validate"]) == 3
    assert "Validation failed" in capsys.readouterr().err


def test_score_cli_rejects_malformed_schedule(example_path, tmp_path):
    schedule = tmp_path / "bad.out"
    schedule.write_text("1\n0 3\n1 2\n", encoding="utf-8")
    assert score_main(["-i", str(example_path), "-s", str(schedule)]) == 2


def test_batch_runs_every_policy(workspace_input, tmp_path):
    out_dir = tmp_path / "outputs"
    report = run_batch(workspace_input.parent, out_dir)
    assert report == [{"case": "a_example.txt", "scores": {"iterative": 21, "one-pass": 17}}]
    assert (out_dir / "iterative" / "a_example.txt").exists()
    assert json.loads((out_dir / "report.json").read_text(encoding="utf-8")) == report


def test_generated_cases_parse(tmp_path):
    created = generate_cases(tmp_path, cases=3, seed=11)
    assert [path.name for path in created] == ["case_001.txt", "case_002.txt", "case_003.txt"]
    for path in created:
        problem = load_problem(path)
        assert problem.sources


def test_generator_text_roundtrip():
    problem = generate_instance(random.Random(5), 30, 4, 12)
    assert parse_problem_from_text(problem_to_text(problem)) == problem
