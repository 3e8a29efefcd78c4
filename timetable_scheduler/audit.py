"""
Post-hoc verification of a generated schedule.
"""
import logging
from collections import Counter
from typing import List, Sequence

from .models.entities import PERIODS, Teacher, SchoolClass, ScheduleSlot

logger = logging.getLogger(__name__)


def verify_schedule(schedule: Sequence[ScheduleSlot],
                    teachers: Sequence[Teacher],
                    classes: Sequence[SchoolClass],
                    periods: Sequence[str] = PERIODS,
                    require_complete: bool = False) -> List[str]:
    """
    Check a schedule against the hard scheduling rules.

    Checks for:
    - No teacher or class booked twice at the same day and period
    - Subject quotas never exceeded (and met exactly if require_complete)
    - Daily load limits of teachers and classes
    - Teacher grade eligibility and day availability
    - Class period window

    Args:
        schedule: Slots to check
        teachers: Teacher roster the schedule was built from
        classes: Class roster the schedule was built from
        periods: Period enumeration
        require_complete: Also require every quota to be met exactly

    Returns:
        List of violation descriptions (empty if the schedule is valid)
    """
    violations = []
    teacher_map = {t.id: t for t in teachers}
    class_map = {c.id: c for c in classes}

    teacher_cells = Counter((s.teacher_id, s.day, s.period) for s in schedule)
    class_cells = Counter((s.class_id, s.day, s.period) for s in schedule)
    for (teacher_id, day, period), count in teacher_cells.items():
        if count > 1:
            violations.append(f"Teacher {teacher_id} booked {count} times on {day} {period}")
    for (class_id, day, period), count in class_cells.items():
        if count > 1:
            violations.append(f"Class {class_id} booked {count} times on {day} {period}")

    teacher_days = Counter((s.teacher_id, s.day) for s in schedule)
    for (teacher_id, day), load in teacher_days.items():
        teacher = teacher_map.get(teacher_id)
        if teacher and load > teacher.max_hours_per_day:
            violations.append(
                f"Teacher {teacher.name} has {load} periods on {day} (max {teacher.max_hours_per_day})"
            )

    class_days = Counter((s.class_id, s.day) for s in schedule)
    for (class_id, day), load in class_days.items():
        school_class = class_map.get(class_id)
        if school_class and load > school_class.constraints.max_hours_per_day:
            violations.append(
                f"Class {school_class.name} has {load} periods on {day} "
                f"(max {school_class.constraints.max_hours_per_day})"
            )

    quotas = Counter((s.class_id, s.subject) for s in schedule)
    for school_class in classes:
        for class_subject in school_class.subjects:
            count = quotas.pop((school_class.id, class_subject.subject), 0)
            if count > class_subject.hours_per_week or (require_complete and count != class_subject.hours_per_week):
                violations.append(
                    f"Class {school_class.name} has {count} periods of {class_subject.subject} "
                    f"(needs {class_subject.hours_per_week})"
                )
    for (class_id, subject), count in quotas.items():
        violations.append(f"Class {class_id} has {count} unrequested periods of {subject}")

    windows = {}
    for school_class in classes:
        constraints = school_class.constraints
        unknown = [label for label in (constraints.preferred_start, constraints.preferred_end)
                   if label not in periods]
        if unknown:
            violations.append(f"Class {school_class.name} has unknown window period(s): {', '.join(unknown)}")
        else:
            windows[school_class.id] = (periods.index(constraints.preferred_start),
                                        periods.index(constraints.preferred_end))

    for slot in schedule:
        teacher = teacher_map.get(slot.teacher_id)
        school_class = class_map.get(slot.class_id)
        if teacher is None or school_class is None:
            violations.append(f"Slot references unknown teacher or class: {slot}")
            continue

        if not teacher.can_teach_grade(school_class.grade):
            violations.append(f"Teacher {teacher.name} may not teach grade {school_class.grade}: {slot}")
        if not teacher.is_available(slot.day):
            violations.append(f"Teacher {teacher.name} is not available on {slot.day}: {slot}")

        if school_class.id not in windows:
            continue
        start, end = windows[school_class.id]
        if slot.period not in periods or not start <= periods.index(slot.period) <= end:
            violations.append(f"Period outside the window of class {school_class.name}: {slot}")

    if violations:
        logger.warning(f"Schedule verification found {len(violations)} violations")

    return violations
