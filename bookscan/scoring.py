"""Per-library harvest evaluation against a remaining value pool."""

from __future__ import annotations

from typing import Dict, List, Mapping

from .models import Problem, Source

ValuePool = Dict[int, int]


def harvest_capacity(source: Source, remaining_periods: int) -> int:
    """Books `source` can ship if signed up now; zero when setup does not fit."""
    return max(0, (remaining_periods - source.setup) * source.throughput)


def harvestable_items(source: Source, value_pool: Mapping[int, int], remaining_periods: int) -> List[int]:
    available = [item_id for item_id in source.items if value_pool.get(item_id, 0) > 0]
    # sort() is stable, so declaration order breaks ties
    available.sort(key=lambda item_id: value_pool[item_id], reverse=True)
    return available[: harvest_capacity(source, remaining_periods)]


def harvestable_value(source: Source, value_pool: Mapping[int, int], remaining_periods: int) -> int:
    return sum(value_pool[item_id] for item_id in harvestable_items(source, value_pool, remaining_periods))


def static_value(problem: Problem, source: Source) -> int:
    """Value of every book the library holds, ignoring overlap with other libraries."""
    return sum(problem.value_of(item_id) for item_id in source.items)
