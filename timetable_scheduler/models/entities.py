"""
Entity models for the timetable scheduler.
These classes represent the core domain objects used in the scheduling process.
They are built once from the caller's rosters and never mutated during a search.
"""
from dataclasses import dataclass, field
from typing import List, Set, Tuple


# The school week and the daily period enumeration
WEEKDAYS: Tuple[str, ...] = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday")
PERIODS: Tuple[str, ...] = (
    "Period 1", "Period 2", "Period 3", "Period 4", "Period 5", "Period 6"
)


@dataclass
class Teacher:
    """Represents a teacher with the subject they teach and their constraints."""
    id: str
    name: str
    subject: str
    max_hours_per_day: int = 6
    available_days: List[str] = field(default_factory=lambda: list(WEEKDAYS))
    preferred_times: List[str] = field(default_factory=list)
    allowed_grades: Set[str] = field(default_factory=set)

    def can_teach_grade(self, grade: str) -> bool:
        """Check if the teacher is eligible for a grade (no restriction = all grades)."""
        return not self.allowed_grades or grade in self.allowed_grades

    def is_available(self, day: str) -> bool:
        return day in self.available_days


@dataclass
class ClassSubject:
    """A subject a class must take, with its weekly period count."""
    subject: str
    hours_per_week: int
    preferred_days: List[str] = field(default_factory=list)


@dataclass
class ClassConstraints:
    """Class-level limits: daily load and the allowed period window."""
    max_hours_per_day: int = 6
    preferred_start: str = PERIODS[0]
    preferred_end: str = PERIODS[-1]


@dataclass
class SchoolClass:
    """Represents a class (a group of students of one grade)."""
    id: str
    name: str
    grade: str
    subjects: List[ClassSubject] = field(default_factory=list)
    constraints: ClassConstraints = field(default_factory=ClassConstraints)
    student_count: int = 0


@dataclass
class LessonRequirement:
    """
    One (class, subject) pair's need for a number of periods per week.

    The search schedules requirements one period at a time, in input order.
    The period window is stored as inclusive indices into the period enumeration.
    """
    class_id: str
    class_name: str
    grade: str
    subject: str
    hours_needed: int
    preferred_days: List[str]
    max_hours_per_day: int
    start_index: int
    end_index: int

    @property
    def key(self) -> Tuple[str, str]:
        """Key of the per-(class, subject) scheduled-hours counter."""
        return (self.class_id, self.subject)

    def allows_period(self, period_index: int) -> bool:
        return self.start_index <= period_index <= self.end_index

    def __str__(self) -> str:
        return f"{self.class_name} / {self.subject} ({self.hours_needed} periods)"


@dataclass(frozen=True)
class ScheduleSlot:
    """One committed assignment of a class, subject and teacher to a (day, period)."""
    day: str
    period: str
    class_id: str
    class_name: str
    subject: str
    teacher_id: str
    teacher_name: str

    def matches(self, class_id: str, teacher_id: str, day: str, period: str) -> bool:
        """Check if this slot is the one identified by class, teacher, day and period."""
        return (self.class_id == class_id and self.teacher_id == teacher_id
                and self.day == day and self.period == period)

    def __str__(self) -> str:
        return f"{self.day} {self.period}: {self.class_name} - {self.subject} ({self.teacher_name})"

