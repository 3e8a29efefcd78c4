"""
Main scheduler service module.

This module provides the single entry point of the timetable scheduler.
It orchestrates the feasibility pre-check, the backtracking search and the
reporting of progress, and returns a GenerationResult.
"""
import logging
import time
from typing import Generator, List, Optional, Sequence

from .algorithms.backtracking import BacktrackingSearch, Checkpoint
from .algorithms.feasibility import build_requirements, check_feasibility, workload_warnings
from .audit import verify_schedule
from .config import SchedulerConfig
from .models.entities import Teacher, SchoolClass
from .models.results import GenerationResult, ScheduleStats
from .progress import ProgressReporter, LogCallback, ProgressCallback

logger = logging.getLogger(__name__)

FEASIBILITY_MESSAGE = "No suitable teachers for some subjects or classes"
EXHAUSTED_MESSAGE = "No valid schedule found. Adjust the constraints or add teachers"
EXHAUSTED_CONFLICTS = [
    "Constraint conflict",
    "Insufficient teachers",
    "Time constraints too strict",
]


class TimetableScheduler:
    """
    Timetable generation service.

    This class is responsible for:
    - Expanding classes into lesson requirements
    - Rejecting rosters that fail the feasibility pre-check
    - Running the backtracking search and reporting its progress
    - Building the success or failure result
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        """
        Initialize the scheduler service.

        Args:
            config: Scheduler settings (defaults apply when omitted)
        """
        self.config = config or SchedulerConfig()

    def generate_steps(self,
                       teachers: Sequence[Teacher],
                       classes: Sequence[SchoolClass],
                       on_log: Optional[LogCallback] = None,
                       on_progress: Optional[ProgressCallback] = None
                       ) -> Generator[Checkpoint, None, GenerationResult]:
        """
        Generate a schedule, yielding at every search checkpoint.

        The generator's return value is the GenerationResult. A host that stops
        resuming the generator abandons the search.

        Raises:
            ValueError: If a class carries a malformed constraint
        """
        start_time = time.time()
        config = self.config
        reporter = ProgressReporter(on_log, on_progress, cap=config.progress_cap)

        reporter.log("Starting schedule generation...")
        reporter.log(f"Teachers: {len(teachers)}")
        reporter.log(f"Classes: {len(classes)}")

        try:
            requirements = build_requirements(classes, config.periods)
        except ValueError as e:
            logger.error(f"Invalid class data: {str(e)}")
            raise

        reporter.log(f"Total required periods: {sum(r.hours_needed for r in requirements)}")

        if not teachers:
            reporter.warning("No teachers have been added")
        if not classes:
            reporter.warning("No classes have been added")
        for warning in workload_warnings(teachers, requirements, config.days, config.periods):
            reporter.warning(warning)

        conflicts = check_feasibility(teachers, requirements)
        if conflicts:
            for conflict in conflicts:
                reporter.warning(conflict)
            return GenerationResult.failed(FEASIBILITY_MESSAGE, conflicts)

        search = BacktrackingSearch(
            teachers,
            requirements,
            days=config.days,
            periods=config.periods,
            checkpoint_interval=config.checkpoint_interval
        )

        reporter.log("Starting backtracking search...")
        for checkpoint in search.steps():
            progress = reporter.report(checkpoint.progress)
            reporter.log(
                f"Processing requirement {checkpoint.requirement_index + 1} of "
                f"{checkpoint.total_requirements} (iteration {checkpoint.iterations}, {progress:.0f}%)",
                logging.DEBUG
            )
            yield checkpoint

        duration_ms = int((time.time() - start_time) * 1000)
        reporter.log(f"Search finished in {duration_ms}ms after {search.iterations} iterations")

        if not search.solved:
            deepest = requirements[search.deepest_index]
            reporter.log(f"Failed to find a valid schedule (deepest requirement reached: {deepest})")
            return GenerationResult.failed(EXHAUSTED_MESSAGE, EXHAUSTED_CONFLICTS)

        schedule = search.schedule
        for violation in verify_schedule(schedule, teachers, classes, config.periods,
                                         require_complete=True):
            logger.error(f"Schedule violation: {violation}")

        reporter.log(f"Schedule generated successfully! {len(schedule)} periods scheduled")
        reporter.complete()

        stats = ScheduleStats(
            total_slots=len(config.days) * len(config.periods) * len(classes),
            filled_slots=len(schedule),
            iterations=search.iterations,
            duration_ms=duration_ms
        )
        return GenerationResult.succeeded(schedule, stats)

    def generate(self,
                 teachers: Sequence[Teacher],
                 classes: Sequence[SchoolClass],
                 on_log: Optional[LogCallback] = None,
                 on_progress: Optional[ProgressCallback] = None) -> GenerationResult:
        """
        Generate a schedule, running the search to completion.

        Args:
            teachers: Teacher roster
            classes: Class roster
            on_log: Called with each human-readable trace line
            on_progress: Called with progress percentages

        Returns:
            GenerationResult describing the schedule or the failure
        """
        steps = self.generate_steps(teachers, classes, on_log, on_progress)
        while True:
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value


def generate_schedule(teachers: List[Teacher],
                      classes: List[SchoolClass],
                      on_log: Optional[LogCallback] = None,
                      on_progress: Optional[ProgressCallback] = None) -> GenerationResult:
    """Generate a schedule with the default configuration."""
    return TimetableScheduler().generate(teachers, classes, on_log, on_progress)
