"""Random instance generator for local experiments."""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import List, Tuple

from .models import Problem, Source


def generate_instance(
    rng: random.Random,
    item_total: int,
    source_total: int,
    deadline: int,
    value_range: Tuple[int, int] = (0, 100),
    holdings_range: Tuple[int, int] = (1, 20),
    setup_range: Tuple[int, int] = (1, 10),
    throughput_range: Tuple[int, int] = (1, 5),
) -> Problem:
    values = tuple(rng.randint(*value_range) for _ in range(item_total))
    sources: List[Source] = []
    for source_id in range(source_total):
        holdings = min(item_total, rng.randint(*holdings_range))
        items = tuple(rng.sample(range(item_total), holdings))
        sources.append(
            Source(
                source_id=source_id,
                item_count=len(items),
                setup=rng.randint(*setup_range),
                throughput=rng.randint(*throughput_range),
                items=items,
            )
        )
    return Problem(item_values=values, sources=tuple(sources), deadline=deadline)


def problem_to_text(problem: Problem) -> str:
    lines = [
        f"{problem.item_total} {len(problem.sources)} {problem.deadline}",
        " ".join(str(value) for value in problem.item_values),
    ]
    for source in problem.sources:
        lines.append(f"{len(source.items)} {source.setup} {source.throughput}")
        lines.append(" ".join(str(item_id) for item_id in source.items))
    return "\n".join(lines) + "\n"


def generate_cases(
    out_dir: str | Path,
    cases: int,
    seed: int,
    item_range: Tuple[int, int] = (20, 200),
    source_range: Tuple[int, int] = (2, 30),
    deadline_range: Tuple[int, int] = (5, 60),
) -> List[Path]:
    rng = random.Random(seed)
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    created: List[Path] = []
    for index in range(1, cases + 1):
        item_total = rng.randint(*item_range)
        source_total = rng.randint(*source_range)
        deadline = rng.randint(*deadline_range)
        problem = generate_instance(rng, item_total, source_total, deadline)
        path = out_dir / f"case_{index:03d}.txt"
        path.write_text(problem_to_text(problem), encoding="utf-8")
        created.append(path)
    return created


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate random book scanning instances")
    parser.add_argument("--cases", type=int, default=1, help="number of cases to generate")
    parser.add_argument("--out-dir", default="./test_inputs", help="output directory")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--books", type=int, help="fixed book count")
    parser.add_argument("--libraries", type=int, help="fixed library count")
    parser.add_argument("--days", type=int, help="fixed number of days")
    args = parser.parse_args(argv)

    seed = args.seed if args.seed is not None else random.randrange(1 << 30)
    item_range = (args.books, args.books) if args.books is not None else (20, 200)
    source_range = (args.libraries, args.libraries) if args.libraries is not None else (2, 30)
    deadline_range = (args.days, args.days) if args.days is not None else (5, 60)

    created = generate_cases(args.out_dir, args.cases, seed, item_range, source_range, deadline_range)
    for path in created:
        print(f"Created {path}")
    print(f"Random seed used: {seed}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
