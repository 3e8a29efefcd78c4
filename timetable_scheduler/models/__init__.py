from .entities import (
    WEEKDAYS, PERIODS, Teacher, ClassSubject, ClassConstraints, SchoolClass,
    LessonRequirement, ScheduleSlot
)
from .results import ScheduleStats, GenerationResult

__all__ = [
    'WEEKDAYS', 'PERIODS', 'Teacher', 'ClassSubject', 'ClassConstraints', 'SchoolClass',
    'LessonRequirement', 'ScheduleSlot', 'ScheduleStats', 'GenerationResult'
]
