"""Run every instance in a directory through the scheduling policies."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence

from .parser import ProblemFormatError, load_problem
from .postprocess import schedule_to_text
from .scheduler import SCHEDULERS
from .solver import SolverConfig, solve_problem

logger = logging.getLogger("bookscan.batch")


def run_batch(
    in_dir: str | Path,
    out_dir: str | Path,
    policies: Sequence[str] = tuple(SCHEDULERS),
    pattern: str = "*.txt",
) -> List[Dict[str, object]]:
    """Solve each instance with each policy and write a `report.json`."""
    in_dir = Path(in_dir)
    out_dir = Path(out_dir)
    report: List[Dict[str, object]] = []

    for instance_path in sorted(in_dir.glob(pattern)):
        entry: Dict[str, object] = {"case": instance_path.name}
        try:
            problem = load_problem(instance_path)
        except ProblemFormatError as exc:
            logger.warning("skipping %s: %s", instance_path.name, exc)
            entry["error"] = str(exc)
            report.append(entry)
            continue

        scores: Dict[str, int] = {}
        for policy in policies:
            result = solve_problem(problem, SolverConfig(policy=policy))
            policy_dir = out_dir / policy
            policy_dir.mkdir(parents=True, exist_ok=True)
            (policy_dir / instance_path.name).write_text(schedule_to_text(result.schedule), encoding="utf-8")
            scores[policy] = result.score
            logger.info("%s %s %d", instance_path.name, policy, result.score)
        entry["scores"] = scores
        report.append(entry)

    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "report.json").write_text(json.dumps(report, indent=2), encoding="utf-8")
    return report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Batch-solve a directory of instances")
    parser.add_argument("--in-dir", required=True)
    parser.add_argument("--out-dir", help="where to write outputs (default: <in-dir>/outputs)")
    parser.add_argument("--policy", action="append", choices=sorted(SCHEDULERS), help="policy to run; repeatable")
    parser.add_argument("--pattern", default="*.txt")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    in_dir = Path(args.in_dir)
    out_dir = Path(args.out_dir) if args.out_dir else in_dir / "outputs"
    policies = args.policy or sorted(SCHEDULERS)
    report = run_batch(in_dir, out_dir, policies, args.pattern)

    for policy in policies:
        total = sum(entry["scores"][policy] for entry in report if "scores" in entry)
        print(f"{policy}: total score {total}")
    print("Report:", out_dir / "report.json")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
