"""
Tests for the day and period ordering heuristics.
"""
from timetable_scheduler.algorithms.feasibility import build_requirements
from timetable_scheduler.algorithms.ordering import preferred_first, order_days, order_periods
from timetable_scheduler.models.entities import WEEKDAYS, PERIODS, Teacher


def test_preferred_first_is_stable():
    items = ['a', 'b', 'c', 'd', 'e']
    assert preferred_first(items, ['d', 'b']) == ['b', 'd', 'a', 'c', 'e']


def test_no_preference_keeps_natural_order():
    assert preferred_first(WEEKDAYS, []) == list(WEEKDAYS)


def test_unknown_preferences_are_ignored():
    assert preferred_first(['a', 'b'], ['z']) == ['a', 'b']


def test_days_ordered_by_requirement(school_classes):
    science = build_requirements(school_classes)[1]
    assert order_days(science, WEEKDAYS) == ['Monday', 'Wednesday', 'Sunday', 'Tuesday', 'Thursday']


def test_periods_ordered_by_teacher():
    teacher = Teacher(id='T001', name='Nour', subject='Art', preferred_times=['Period 5', 'Period 2'])
    assert order_periods(teacher, PERIODS) == [
        'Period 2', 'Period 5', 'Period 1', 'Period 3', 'Period 4', 'Period 6'
    ]
