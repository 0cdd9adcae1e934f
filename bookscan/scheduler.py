"""Greedy library scheduling policies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .models import Problem, Schedule, ScheduleBuilder, Source
from .scoring import ValuePool, harvestable_items, harvestable_value, static_value

logger = logging.getLogger("bookscan.scheduler")


@dataclass(slots=True)
class SchedulerConfig:
    rank_offset: float = 42.0
    rank_scale: int = 1000
    # Also charge shipping days to the global clock, not only signup.
    charge_harvest_time: bool = False
    # Leave out libraries that would ship nothing; stops the iterative
    # policy at the first worthless pick.
    drop_empty_activations: bool = False


class Scheduler:
    """Common interface: turn a problem into a schedule."""

    name = "base"

    def __init__(self, config: SchedulerConfig | None = None):
        self.config = config or SchedulerConfig()

    def schedule(self, problem: Problem) -> Schedule:
        raise NotImplementedError


class OnePassScheduler(Scheduler):
    """Sort libraries once by total book value and sign them up in that order.

    Books are not deduplicated across libraries, so the same book may be
    listed by several activations; the scorer pays it out once.
    """

    name = "one-pass"

    def schedule(self, problem: Problem) -> Schedule:
        static_scores: Dict[int, int] = {
            source.source_id: static_value(problem, source) for source in problem.sources
        }
        ordered = sorted(problem.sources, key=lambda source: static_scores[source.source_id], reverse=True)

        builder = ScheduleBuilder()
        deadline = problem.deadline
        days_consumed = 0

        for source in ordered:
            if days_consumed >= deadline:
                break
            if days_consumed + source.full_harvest_duration <= deadline:
                if not source.items and self.config.drop_empty_activations:
                    continue
                builder.add(source, source.items)
                days_consumed += source.full_harvest_duration
                logger.debug("library %d fully scanned, day %d/%d", source.source_id, days_consumed, deadline)
            elif days_consumed + source.setup > deadline:
                logger.debug("library %d skipped: signup %d does not fit", source.source_id, source.setup)
                continue
            else:
                remaining = deadline - days_consumed
                builder.add(source, source.items[: remaining * source.throughput])
                days_consumed = deadline
                logger.debug("library %d partially scanned with %d days left", source.source_id, remaining)

        schedule = builder.build()
        logger.info("one-pass policy signed up %d of %d libraries", len(schedule), len(problem.sources))
        return schedule


class IterativeScheduler(Scheduler):
    """Re-rank the remaining libraries after every signup.

    Each step evaluates what every library could still ship against the
    books nobody has claimed yet, picks the best one and removes its books
    from the pool, so no book is ever shipped twice.
    """

    name = "iterative"

    def rank_score(self, source: Source, potential: int) -> float:
        if potential == 0:
            return float("-inf")
        return int((self.config.rank_offset - source.setup / potential) * self.config.rank_scale)

    def _rank_key(self, source: Source, value_pool: ValuePool, remaining: int) -> Tuple[float, int]:
        potential = harvestable_value(source, value_pool, remaining)
        return (-self.rank_score(source, potential), source.setup)

    def schedule(self, problem: Problem) -> Schedule:
        value_pool: ValuePool = problem.value_map()
        working: List[Source] = list(problem.sources)
        remaining = problem.deadline
        builder = ScheduleBuilder()

        while working and remaining > 0:
            working = [source for source in working if source.setup < remaining]
            if not working:
                break

            # min() keeps the first of equal keys, i.e. input order.
            selected = min(working, key=lambda source: self._rank_key(source, value_pool, remaining))
            working.remove(selected)

            shipped = harvestable_items(selected, value_pool, remaining)
            if not shipped and self.config.drop_empty_activations:
                # Best candidate is worthless, so every other one is too.
                logger.debug("no library can add value with %d days left", remaining)
                break

            builder.add(selected, shipped)
            for item_id in shipped:
                del value_pool[item_id]

            remaining -= selected.setup
            if self.config.charge_harvest_time:
                remaining -= -(-len(shipped) // selected.throughput)
            logger.debug(
                "library %d ships %d books, %d days left",
                selected.source_id,
                len(shipped),
                remaining,
            )

        schedule = builder.build()
        logger.info("iterative policy signed up %d of %d libraries", len(schedule), len(problem.sources))
        return schedule


SCHEDULERS = {
    OnePassScheduler.name: OnePassScheduler,
    IterativeScheduler.name: IterativeScheduler,
}


def get_scheduler(name: str, config: SchedulerConfig | None = None) -> Scheduler:
    try:
        scheduler_cls = SCHEDULERS[name]
    except KeyError as exc:
        raise ValueError(f"unknown scheduling policy {name!r}; expected one of {sorted(SCHEDULERS)}") from exc
    return scheduler_cls(config)
