"""
Shared fixtures for the timetable scheduler tests.
"""
import pytest

from timetable_scheduler.models.entities import (
    WEEKDAYS, Teacher, ClassSubject, ClassConstraints, SchoolClass
)


@pytest.fixture
def math_teacher():
    """A Math teacher available all week with no restrictions."""
    return Teacher(id='T001', name='David Jones', subject='Math', max_hours_per_day=6,
                   available_days=list(WEEKDAYS))


@pytest.fixture
def single_class():
    """Class 1A needing Math twice a week."""
    return SchoolClass(
        id='C001', name='1A', grade='Grade 1',
        subjects=[ClassSubject(subject='Math', hours_per_week=2)]
    )


@pytest.fixture
def school_teachers():
    """A small staff with preferences, a grade restriction and limited days."""
    return [
        Teacher(id='T001', name='David Jones', subject='Math', max_hours_per_day=4),
        Teacher(id='T002', name='Sarah Davis', subject='Math', max_hours_per_day=4,
                allowed_grades={'Grade 2'}),
        Teacher(id='T003', name='Michael Miller', subject='Science', max_hours_per_day=6,
                preferred_times=['Period 3']),
        Teacher(id='T004', name='Laila Hassan', subject='Arabic', max_hours_per_day=2,
                available_days=['Sunday', 'Monday', 'Tuesday']),
    ]


@pytest.fixture
def school_classes():
    """Two classes with different windows and daily limits."""
    return [
        SchoolClass(
            id='C001', name='1A', grade='Grade 1',
            subjects=[
                ClassSubject(subject='Math', hours_per_week=5),
                ClassSubject(subject='Science', hours_per_week=3, preferred_days=['Monday', 'Wednesday']),
                ClassSubject(subject='Arabic', hours_per_week=4),
            ],
            constraints=ClassConstraints(max_hours_per_day=5, preferred_start='Period 1',
                                         preferred_end='Period 5')
        ),
        SchoolClass(
            id='C002', name='2B', grade='Grade 2',
            subjects=[
                ClassSubject(subject='Math', hours_per_week=4),
                ClassSubject(subject='Science', hours_per_week=2),
                ClassSubject(subject='Arabic', hours_per_week=2),
            ],
            constraints=ClassConstraints(max_hours_per_day=4, preferred_start='Period 2',
                                         preferred_end='Period 6')
        ),
    ]
