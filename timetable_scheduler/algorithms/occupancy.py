"""
Occupancy tracking for the backtracking search.

Holds the mutable search state: a boolean (day, period) grid per teacher and
per class, the partial schedule, and the per-(class, subject) scheduled-hours
counter. The grids are derived from the committed slots and are kept
consistent with them by commit and undo.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..models.entities import Teacher, LessonRequirement, ScheduleSlot

logger = logging.getLogger(__name__)


class OccupancyError(RuntimeError):
    """Raised when commit/undo are called out of discipline."""


class OccupancyTracker:
    """
    Tracks which teachers and classes are busy at each (day, period).

    `commit` does not validate the assignment; callers check validity first.
    """

    def __init__(self, days: Sequence[str], periods: Sequence[str]):
        """
        Initialize empty grids.

        Args:
            days: Ordered weekdays
            periods: Ordered period enumeration
        """
        self.days = tuple(days)
        self.periods = tuple(periods)
        self.day_index = {day: i for i, day in enumerate(self.days)}
        self.period_index = {period: i for i, period in enumerate(self.periods)}

        shape = (len(self.days), len(self.periods))
        self._teacher_grids: Dict[str, np.ndarray] = defaultdict(lambda: np.zeros(shape, dtype=bool))
        self._class_grids: Dict[str, np.ndarray] = defaultdict(lambda: np.zeros(shape, dtype=bool))

        self.schedule: List[ScheduleSlot] = []
        self.scheduled_hours: Dict[Tuple[str, str], int] = defaultdict(int)

    def _cell(self, day: str, period: str):
        return self.day_index[day], self.period_index[period]

    def is_teacher_free(self, teacher_id: str, day: str, period: str) -> bool:
        return not self._teacher_grids[teacher_id][self._cell(day, period)]

    def is_class_free(self, class_id: str, day: str, period: str) -> bool:
        return not self._class_grids[class_id][self._cell(day, period)]

    def teacher_load(self, teacher_id: str, day: str) -> int:
        """Number of periods the teacher teaches on a day."""
        return int(self._teacher_grids[teacher_id][self.day_index[day]].sum())

    def class_load(self, class_id: str, day: str) -> int:
        """Number of periods the class is taught on a day."""
        return int(self._class_grids[class_id][self.day_index[day]].sum())

    def hours_scheduled(self, requirement: LessonRequirement) -> int:
        return self.scheduled_hours.get(requirement.key, 0)

    def commit(self, requirement: LessonRequirement, teacher: Teacher, day: str, period: str) -> ScheduleSlot:
        """
        Record an assignment in the grids, the schedule and the hours counter.

        Returns:
            The committed ScheduleSlot

        Raises:
            OccupancyError: If either cell is already occupied
        """
        cell = self._cell(day, period)
        teacher_grid = self._teacher_grids[teacher.id]
        class_grid = self._class_grids[requirement.class_id]

        if teacher_grid[cell] or class_grid[cell]:
            logger.error(f"Commit into occupied cell: {requirement}, {teacher.name}, {day} {period}")
            raise OccupancyError(f"Cell {day} {period} is already occupied")

        slot = ScheduleSlot(
            day=day,
            period=period,
            class_id=requirement.class_id,
            class_name=requirement.class_name,
            subject=requirement.subject,
            teacher_id=teacher.id,
            teacher_name=teacher.name
        )
        self.schedule.append(slot)
        teacher_grid[cell] = True
        class_grid[cell] = True
        self.scheduled_hours[requirement.key] += 1

        return slot

    def undo(self, requirement: LessonRequirement, teacher: Teacher, day: str, period: str) -> None:
        """
        Exactly reverse the matching commit.

        Raises:
            OccupancyError: If no matching slot was committed
        """
        for index in range(len(self.schedule) - 1, -1, -1):
            if self.schedule[index].matches(requirement.class_id, teacher.id, day, period):
                break
        else:
            logger.error(f"Undo of a slot never committed: {requirement}, {teacher.name}, {day} {period}")
            raise OccupancyError(f"No committed slot for {requirement.class_name} at {day} {period}")

        del self.schedule[index]
        cell = self._cell(day, period)
        self._teacher_grids[teacher.id][cell] = False
        self._class_grids[requirement.class_id][cell] = False
        self.scheduled_hours[requirement.key] -= 1
