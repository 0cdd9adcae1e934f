"""Solver orchestration: run a policy, score it and optionally bound it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .bounds import lp_upper_bound
from .models import Problem, Schedule
from .scheduler import IterativeScheduler, SchedulerConfig, get_scheduler
from .scorer import score
from .validation import validate_schedule

logger = logging.getLogger("bookscan.solver")

EPSILON = 1e-6


@dataclass(slots=True)
class SolverConfig:
    policy: str = IterativeScheduler.name
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    compute_bound: bool = False
    bound_time_limit: float | None = None
    validate: bool = False


@dataclass(slots=True)
class SolverResult:
    schedule: Schedule
    score: int
    policy: str
    upper_bound: float | None = None

    @property
    def gap(self) -> float | None:
        # Undefined when the schedule overshoots the shipping windows.
        if self.upper_bound is None or self.upper_bound <= 0 or self.score > self.upper_bound + EPSILON:
            return None
        return 1.0 - self.score / self.upper_bound


def solve_problem(problem: Problem, solver_config: SolverConfig | None = None) -> SolverResult:
    solver_config = solver_config or SolverConfig()

    scheduler = get_scheduler(solver_config.policy, solver_config.scheduler)
    schedule = scheduler.schedule(problem)
    if solver_config.validate:
        # One-pass partial harvests ignore signup days, so only check structure.
        validate_schedule(problem, schedule, check_capacity=solver_config.policy == IterativeScheduler.name)
    total = score(problem, schedule)

    upper_bound = None
    if solver_config.compute_bound:
        upper_bound = lp_upper_bound(problem, time_limit=solver_config.bound_time_limit)
        logger.info("LP upper bound %.1f", upper_bound)
        if total > upper_bound + EPSILON:
            logger.warning(
                "score %d exceeds the LP bound %.1f; %s schedule overruns shipping windows",
                total,
                upper_bound,
                scheduler.name,
            )

    logger.info("policy %s scored %d with %d libraries", scheduler.name, total, len(schedule))
    return SolverResult(schedule=schedule, score=total, policy=scheduler.name, upper_bound=upper_bound)
