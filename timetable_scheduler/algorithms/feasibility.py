"""
Pre-search checks for the timetable scheduler.

Expands classes into lesson requirements and verifies that every requirement
has at least one teacher who could take it. These checks are necessary but not
sufficient: a global assignment may still not exist, which is the search's job.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from ..models.entities import (
    WEEKDAYS, PERIODS, Teacher, SchoolClass, LessonRequirement
)

logger = logging.getLogger(__name__)


def build_requirements(classes: Sequence[SchoolClass],
                       periods: Sequence[str] = PERIODS) -> List[LessonRequirement]:
    """
    Flatten classes into lesson requirements, in class order then subject order.

    Args:
        classes: Class roster
        periods: Period enumeration used to resolve the class period window

    Returns:
        List of LessonRequirement objects

    Raises:
        ValueError: If a class has a malformed constraint or a duplicated subject
    """
    requirements = []

    for school_class in classes:
        constraints = school_class.constraints
        for label in (constraints.preferred_start, constraints.preferred_end):
            if label not in periods:
                raise ValueError(f"Class {school_class.name}: unknown period '{label}'")

        start_index = periods.index(constraints.preferred_start)
        end_index = periods.index(constraints.preferred_end)
        if start_index > end_index:
            raise ValueError(
                f"Class {school_class.name}: start period '{constraints.preferred_start}' "
                f"is after end period '{constraints.preferred_end}'"
            )

        seen_subjects = set()
        for class_subject in school_class.subjects:
            if class_subject.subject in seen_subjects:
                raise ValueError(
                    f"Class {school_class.name}: subject '{class_subject.subject}' listed twice"
                )
            if class_subject.hours_per_week < 0:
                raise ValueError(
                    f"Class {school_class.name}: negative hours for '{class_subject.subject}'"
                )
            seen_subjects.add(class_subject.subject)

            requirements.append(LessonRequirement(
                class_id=school_class.id,
                class_name=school_class.name,
                grade=school_class.grade,
                subject=class_subject.subject,
                hours_needed=class_subject.hours_per_week,
                preferred_days=list(class_subject.preferred_days),
                max_hours_per_day=constraints.max_hours_per_day,
                start_index=start_index,
                end_index=end_index
            ))

    return requirements


def teachers_by_subject(teachers: Sequence[Teacher]) -> Dict[str, List[Teacher]]:
    """Group teachers by the subject they teach, keeping input order."""
    grouped = defaultdict(list)
    for teacher in teachers:
        grouped[teacher.subject].append(teacher)
    return dict(grouped)


def check_feasibility(teachers: Sequence[Teacher],
                      requirements: Sequence[LessonRequirement]) -> List[str]:
    """
    Check that every requirement has a teacher for its subject and grade.

    Both checks run over the full requirement set so every problem is reported
    at once. Missing-teacher conflicts are listed before grade conflicts.

    Args:
        teachers: Teacher roster
        requirements: Lesson requirements to check

    Returns:
        List of conflict descriptions (empty if the search may be attempted)
    """
    by_subject = teachers_by_subject(teachers)
    missing_teachers = []
    grade_conflicts = []

    for requirement in requirements:
        candidates = by_subject.get(requirement.subject)
        if not candidates:
            missing_teachers.append(
                f"No teacher for subject: {requirement.subject} (class {requirement.class_name})"
            )
        elif not any(t.can_teach_grade(requirement.grade) for t in candidates):
            grade_conflicts.append(
                f"No teacher can teach {requirement.subject} to grade {requirement.grade} "
                f"(class {requirement.class_name})"
            )

    conflicts = missing_teachers + grade_conflicts
    if conflicts:
        logger.warning(f"Feasibility check found {len(conflicts)} conflicts")
    return conflicts


def workload_warnings(teachers: Sequence[Teacher],
                      requirements: Sequence[LessonRequirement],
                      days: Sequence[str] = WEEKDAYS,
                      periods: Sequence[str] = PERIODS) -> List[str]:
    """
    Compute advisory warnings that never block the search.

    Flags subjects whose weekly demand exceeds the combined weekly capacity
    of the teachers who teach them.
    """
    warnings = []

    demand = defaultdict(int)
    for requirement in requirements:
        demand[requirement.subject] += requirement.hours_needed

    capacity = defaultdict(int)
    for teacher in teachers:
        working_days = len(set(teacher.available_days) & set(days))
        capacity[teacher.subject] += min(teacher.max_hours_per_day, len(periods)) * working_days

    for subject, needed in demand.items():
        if subject in capacity and needed > capacity[subject]:
            warnings.append(
                f"Subject {subject} needs {needed} periods per week but its teachers "
                f"can cover at most {capacity[subject]}"
            )

    return warnings
