"""
Weekly school timetable scheduler.

Assigns each class's weekly subject periods to (day, period, teacher) slots
with an exhaustive backtracking search.
"""
from .config import SchedulerConfig
from .models.entities import (
    WEEKDAYS, PERIODS, Teacher, ClassSubject, ClassConstraints, SchoolClass, ScheduleSlot
)
from .models.results import GenerationResult, ScheduleStats
from .scheduler import TimetableScheduler, generate_schedule

__version__ = "0.1.0"

__all__ = [
    'SchedulerConfig', 'WEEKDAYS', 'PERIODS', 'Teacher', 'ClassSubject', 'ClassConstraints',
    'SchoolClass', 'ScheduleSlot', 'GenerationResult', 'ScheduleStats',
    'TimetableScheduler', 'generate_schedule'
]
