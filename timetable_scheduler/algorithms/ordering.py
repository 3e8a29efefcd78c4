"""
Ordering heuristics for the backtracking search.

They only decide which feasible schedule is found first, never whether one exists.
"""
from typing import Iterable, List, Sequence

from ..models.entities import Teacher, LessonRequirement


def preferred_first(items: Sequence[str], preferred: Iterable[str]) -> List[str]:
    """Stable partition: preferred items first, then the rest, each in original order."""
    preferred = set(preferred)
    if not preferred:
        return list(items)
    return ([item for item in items if item in preferred]
            + [item for item in items if item not in preferred])


def order_days(requirement: LessonRequirement, days: Sequence[str]) -> List[str]:
    """Order weekdays by the requirement's preferred days."""
    return preferred_first(days, requirement.preferred_days)


def order_periods(teacher: Teacher, periods: Sequence[str]) -> List[str]:
    """Order periods by the teacher's preferred times."""
    return preferred_first(periods, teacher.preferred_times)
