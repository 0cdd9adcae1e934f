"""High-level entry points for the book scanning scheduler."""

from .models import Activation, DataIntegrityError, Problem, Schedule, Source
from .parser import ProblemFormatError, load_problem, parse_problem_from_text
from .scheduler import IterativeScheduler, OnePassScheduler, Scheduler, SchedulerConfig, get_scheduler
from .scorer import load_schedule, score, score_from_files, score_schedule
from .solver import SolverConfig, SolverResult, solve_problem
from .validation import ScheduleValidationError, validate_schedule

__all__ = [
    "Activation",
    "DataIntegrityError",
    "IterativeScheduler",
    "OnePassScheduler",
    "Problem",
    "ProblemFormatError",
    "Schedule",
    "ScheduleValidationError",
    "Scheduler",
    "SchedulerConfig",
    "SolverConfig",
    "SolverResult",
    "Source",
    "get_scheduler",
    "load_problem",
    "load_schedule",
    "parse_problem_from_text",
    "score",
    "score_from_files",
    "score_schedule",
    "solve_problem",
    "validate_schedule",
]
