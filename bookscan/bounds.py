"""LP relaxation upper bound on the achievable score, built with PuLP."""

from __future__ import annotations

from typing import Dict, List, Tuple

import pulp

from .models import Problem

PairKey = Tuple[int, int]


class BoundError(RuntimeError):
    """Raised when the relaxation could not be solved to optimality."""


def _eligible_pairs(problem: Problem) -> Tuple[List[int], List[PairKey], Dict[int, List[PairKey]]]:
    source_ids: List[int] = []
    pairs: List[PairKey] = []
    by_item: Dict[int, List[PairKey]] = {}
    for source in problem.sources:
        # Signup must end before the deadline for anything to ship.
        if source.setup >= problem.deadline:
            continue
        source_ids.append(source.source_id)
        for item_id in source.items:
            if problem.value_of(item_id) <= 0:
                continue
            key = (source.source_id, item_id)
            pairs.append(key)
            by_item.setdefault(item_id, []).append(key)
    return source_ids, pairs, by_item


def lp_upper_bound(problem: Problem, *, time_limit: float | None = None) -> float:
    """Solve the LP relaxation and return its objective.

    Relaxes signups, shipments and claims to fractions; keeps the signup
    budget and each library's shipping window. Any schedule that passes
    `validate_schedule` with `check_capacity=True` scores at most the
    returned value. One-pass partial harvests ignore signup days when
    sizing the shipment, so a one-pass score may exceed it.
    """
    source_ids, pairs, by_item = _eligible_pairs(problem)
    if not pairs:
        return 0.0

    sources = problem.source_lookup()
    model = pulp.LpProblem("book_scanning_relaxation", pulp.LpMaximize)

    y_vars = pulp.LpVariable.dicts("y", source_ids, lowBound=0.0, upBound=1.0)
    z_vars = pulp.LpVariable.dicts("z", pairs, lowBound=0.0, upBound=1.0)
    x_vars = pulp.LpVariable.dicts("x", list(by_item), lowBound=0.0, upBound=1.0)

    # Signups are sequential.
    model += pulp.lpSum(sources[sid].setup * y_vars[sid] for sid in source_ids) <= problem.deadline

    shipped_by_source: Dict[int, List[PairKey]] = {}
    for key in pairs:
        shipped_by_source.setdefault(key[0], []).append(key)
        model += z_vars[key] <= y_vars[key[0]]

    for sid, keys in shipped_by_source.items():
        source = sources[sid]
        window = (problem.deadline - source.setup) * source.throughput
        model += pulp.lpSum(z_vars[key] for key in keys) <= window * y_vars[sid]

    for item_id, keys in by_item.items():
        model += x_vars[item_id] <= pulp.lpSum(z_vars[key] for key in keys)

    model += pulp.lpSum(problem.value_of(item_id) * x_vars[item_id] for item_id in by_item)

    solver = pulp.PULP_CBC_CMD(msg=False, timeLimit=time_limit)
    model.solve(solver)

    status = pulp.LpStatus[model.status]
    if status != "Optimal":
        raise BoundError(f"relaxation finished with status {status}")
    return float(pulp.value(model.objective) or 0.0)
