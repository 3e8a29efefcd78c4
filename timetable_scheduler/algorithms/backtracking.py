"""
Backtracking search for weekly timetables.

The search places lesson requirements one period at a time, in input order,
trying eligible teachers in roster order, days in the requirement's day order
and periods in the teacher's period order. Dead ends are undone and the next
candidate is tried; the first complete assignment found is returned.

The search keeps an explicit stack of choice points instead of recursing, and
is written as a generator that yields a Checkpoint every `checkpoint_interval`
steps so a host can stay responsive or stop resuming it.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..models.entities import WEEKDAYS, PERIODS, Teacher, LessonRequirement, ScheduleSlot
from .feasibility import teachers_by_subject
from .occupancy import OccupancyTracker
from .ordering import order_days, order_periods

logger = logging.getLogger(__name__)

Candidate = Tuple[Teacher, str, str]


@dataclass
class Checkpoint:
    """Snapshot yielded by the search at each checkpoint."""
    iterations: int
    requirement_index: int
    total_requirements: int

    @property
    def progress(self) -> float:
        """Estimated completion in percent, based on the current requirement index."""
        if not self.total_requirements:
            return 0.0
        return self.requirement_index / self.total_requirements * 100


class _Frame:
    """A choice point: one requirement and its position in the candidate list."""
    __slots__ = ('index', 'position', 'trial')

    def __init__(self, index: int, position: int):
        self.index = index
        self.position = position
        self.trial: Optional[Candidate] = None


class BacktrackingSearch:
    """
    Exhaustive depth-first search with commit/undo over an OccupancyTracker.

    A search instance is single use: build a new one for every run.
    """

    def __init__(self,
                 teachers: Sequence[Teacher],
                 requirements: Sequence[LessonRequirement],
                 days: Sequence[str] = WEEKDAYS,
                 periods: Sequence[str] = PERIODS,
                 checkpoint_interval: int = 100):
        """
        Initialize the search.

        Args:
            teachers: Teacher roster
            requirements: Lesson requirements, in the order they are scheduled
            days: Ordered weekdays
            periods: Ordered period enumeration
            checkpoint_interval: Number of steps between checkpoints
        """
        self.requirements = list(requirements)
        self.days = tuple(days)
        self.periods = tuple(periods)
        self.checkpoint_interval = checkpoint_interval

        self.teachers_by_subject = teachers_by_subject(teachers)
        self.tracker = OccupancyTracker(self.days, self.periods)

        self.iterations = 0
        self.deepest_index = 0
        self.solved: Optional[bool] = None
        self._started = False
        self._candidates: Dict[int, List[Candidate]] = {}

    @property
    def schedule(self) -> List[ScheduleSlot]:
        return list(self.tracker.schedule)

    def eligible_teachers(self, requirement: LessonRequirement) -> List[Teacher]:
        """Teachers of the requirement's subject who may teach its grade, in roster order."""
        return [teacher for teacher in self.teachers_by_subject.get(requirement.subject, [])
                if teacher.can_teach_grade(requirement.grade)]

    def candidates(self, index: int) -> List[Candidate]:
        """Trial order of (teacher, day, period) for a requirement."""
        if index not in self._candidates:
            requirement = self.requirements[index]
            days = order_days(requirement, self.days)
            self._candidates[index] = [
                (teacher, day, period)
                for teacher in self.eligible_teachers(requirement)
                for day in days
                for period in order_periods(teacher, self.periods)
            ]
        return self._candidates[index]

    def is_valid_assignment(self, requirement: LessonRequirement, teacher: Teacher,
                            day: str, period: str) -> bool:
        """Check whether the cell can take this requirement and teacher in the current state."""
        tracker = self.tracker

        if not teacher.is_available(day):
            return False

        if not teacher.can_teach_grade(requirement.grade):
            return False

        if not tracker.is_teacher_free(teacher.id, day, period):
            return False

        if not tracker.is_class_free(requirement.class_id, day, period):
            return False

        if not requirement.allows_period(self.periods.index(period)):
            return False

        if tracker.teacher_load(teacher.id, day) >= teacher.max_hours_per_day:
            return False

        if tracker.class_load(requirement.class_id, day) >= requirement.max_hours_per_day:
            return False

        return True

    def _next_valid(self, frame: _Frame) -> Optional[Candidate]:
        candidates = self.candidates(frame.index)
        requirement = self.requirements[frame.index]
        while frame.position < len(candidates):
            candidate = candidates[frame.position]
            frame.position += 1
            if self.is_valid_assignment(requirement, *candidate):
                return candidate
        return None

    def steps(self) -> Iterator[Checkpoint]:
        """
        Run the search, yielding a Checkpoint every `checkpoint_interval` steps.

        When the generator is exhausted, `solved` holds the outcome and, on
        success, `schedule` holds the complete assignment.
        """
        if self._started:
            raise RuntimeError("BacktrackingSearch instances are single use")
        self._started = True

        total = len(self.requirements)
        stack: List[_Frame] = []
        index = 0
        position = 0

        while True:
            # Enter the state at `index`, moving past satisfied requirements
            while True:
                self.iterations += 1
                if self.iterations % self.checkpoint_interval == 0:
                    yield Checkpoint(self.iterations, index, total)

                if index >= total:
                    self.solved = True
                    return

                requirement = self.requirements[index]
                if self.tracker.hours_scheduled(requirement) >= requirement.hours_needed:
                    index += 1
                    position = 0
                    continue
                break

            stack.append(_Frame(index, position))
            self.deepest_index = max(self.deepest_index, index)

            # Commit the next valid candidate, undoing dead ends on the way
            while stack:
                frame = stack[-1]
                if frame.trial is not None:
                    self.tracker.undo(self.requirements[frame.index], *frame.trial)
                    frame.trial = None

                candidate = self._next_valid(frame)
                if candidate is None:
                    stack.pop()
                    continue

                self.tracker.commit(self.requirements[frame.index], *candidate)
                frame.trial = candidate
                # Re-enter the same requirement; earlier candidates would only permute this set
                index = frame.index
                position = frame.position
                break
            else:
                self.solved = False
                return

    def run(self) -> bool:
        """Run the search to completion without interruption."""
        for _ in self.steps():
            pass
        return bool(self.solved)
