"""
Data converter module.

Handles conversions between different data formats:
- DataFrame to domain objects
- JSON-style dictionaries to domain objects
- Schedules to DataFrames and summary reports
"""
import pandas as pd
from dataclasses import asdict
from typing import Any, Dict, List, Sequence
import logging
from collections import defaultdict

from ..models.entities import (
    WEEKDAYS, PERIODS, Teacher, ClassSubject, ClassConstraints, SchoolClass, ScheduleSlot
)

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = ['day', 'period', 'class_id', 'class_name', 'subject', 'teacher_id', 'teacher_name']


def split_cell(value: Any, separator: str = ';') -> List[str]:
    """Split a multi-valued CSV cell, treating missing values as empty."""
    if value is None or pd.isna(value):
        return []
    return [item.strip() for item in str(value).split(separator) if item.strip()]


def int_cell(value: Any, default: int) -> int:
    if value is None or pd.isna(value) or str(value).strip() == '':
        return default
    return int(float(value))


class DataConverter:
    """
    Converts between different data representations used in the system.

    Responsibilities:
    - Convert CSV/DataFrame rosters to domain model objects
    - Convert request payloads to domain model objects
    - Convert schedules back to DataFrames and reports for output
    """

    @staticmethod
    def convert_teachers(teachers_df: pd.DataFrame) -> List[Teacher]:
        """
        Convert teachers DataFrame to Teacher objects.

        Args:
            teachers_df: DataFrame containing teacher data

        Returns:
            List of Teacher objects in file order
        """
        teachers = []

        for _, row in teachers_df.iterrows():
            available_days = split_cell(row.get('Available Days'))

            teacher = Teacher(
                id=str(row['Teacher ID']),
                name=str(row.get('Name', row['Teacher ID'])),
                subject=str(row['Subject']).strip(),
                max_hours_per_day=int_cell(row.get('Max Hours Per Day'), len(PERIODS)),
                available_days=available_days or list(WEEKDAYS),
                preferred_times=split_cell(row.get('Preferred Times')),
                allowed_grades=set(split_cell(row.get('Allowed Grades')))
            )

            teachers.append(teacher)

        return teachers

    @staticmethod
    def convert_classes(classes_df: pd.DataFrame, class_subjects_df: pd.DataFrame) -> List[SchoolClass]:
        """
        Convert classes and class subjects DataFrames to SchoolClass objects.

        Args:
            classes_df: DataFrame containing class data
            class_subjects_df: DataFrame containing one row per (class, subject)

        Returns:
            List of SchoolClass objects in file order
        """
        subjects = defaultdict(list)
        for _, row in class_subjects_df.iterrows():
            subjects[str(row['Class ID'])].append(ClassSubject(
                subject=str(row['Subject']).strip(),
                hours_per_week=int_cell(row.get('Hours Per Week'), 0),
                preferred_days=split_cell(row.get('Preferred Days'))
            ))

        classes = []
        for _, row in classes_df.iterrows():
            class_id = str(row['Class ID'])
            start = row.get('Start Period')
            end = row.get('End Period')

            school_class = SchoolClass(
                id=class_id,
                name=str(row.get('Name', class_id)),
                grade=str(row['Grade']),
                subjects=subjects.get(class_id, []),
                constraints=ClassConstraints(
                    max_hours_per_day=int_cell(row.get('Max Hours Per Day'), len(PERIODS)),
                    preferred_start=PERIODS[0] if start is None or pd.isna(start) else str(start),
                    preferred_end=PERIODS[-1] if end is None or pd.isna(end) else str(end)
                ),
                student_count=int_cell(row.get('Student Count'), 0)
            )

            classes.append(school_class)

        return classes

    @staticmethod
    def teacher_from_dict(data: Dict[str, Any]) -> Teacher:
        """Build a Teacher from a request payload."""
        return Teacher(
            id=str(data['id']),
            name=str(data.get('name', data['id'])),
            subject=str(data['subject']),
            max_hours_per_day=int(data.get('max_hours_per_day', len(PERIODS))),
            available_days=list(data.get('available_days') or WEEKDAYS),
            preferred_times=list(data.get('preferred_times') or []),
            allowed_grades=set(data.get('allowed_grades') or [])
        )

    @staticmethod
    def class_from_dict(data: Dict[str, Any]) -> SchoolClass:
        """Build a SchoolClass from a request payload."""
        constraints = data.get('constraints') or {}
        return SchoolClass(
            id=str(data['id']),
            name=str(data.get('name', data['id'])),
            grade=str(data['grade']),
            subjects=[
                ClassSubject(
                    subject=str(item['subject']),
                    hours_per_week=int(item['hours_per_week']),
                    preferred_days=list(item.get('preferred_days') or [])
                )
                for item in data.get('subjects') or []
            ],
            constraints=ClassConstraints(
                max_hours_per_day=int(constraints.get('max_hours_per_day', len(PERIODS))),
                preferred_start=str(constraints.get('preferred_start', PERIODS[0])),
                preferred_end=str(constraints.get('preferred_end', PERIODS[-1]))
            ),
            student_count=int(data.get('student_count', 0))
        )

    @classmethod
    def convert_roster(cls, payload: Dict[str, Any]):
        """
        Convert a roster payload with 'teachers' and 'classes' lists.

        Returns:
            Tuple of (teachers, classes)

        Raises:
            ValueError: If the payload is missing fields or has invalid values
        """
        try:
            teachers = [cls.teacher_from_dict(item) for item in payload.get('teachers') or []]
            classes = [cls.class_from_dict(item) for item in payload.get('classes') or []]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid roster payload: {str(e)}") from e
        return teachers, classes

    @staticmethod
    def convert_to_schedule_df(schedule: Sequence[ScheduleSlot],
                               days: Sequence[str] = WEEKDAYS,
                               periods: Sequence[str] = PERIODS) -> pd.DataFrame:
        """
        Convert a schedule to a DataFrame sorted by day and period.

        Args:
            schedule: Schedule slots

        Returns:
            DataFrame with one row per slot
        """
        df = pd.DataFrame([asdict(slot) for slot in schedule], columns=SCHEDULE_COLUMNS)
        if df.empty:
            return df

        df['day'] = pd.Categorical(df['day'], categories=list(days), ordered=True)
        df['period'] = pd.Categorical(df['period'], categories=list(periods), ordered=True)
        return df.sort_values(['day', 'period', 'class_name']).reset_index(drop=True)

    @classmethod
    def generate_load_report(cls,
                             schedule: Sequence[ScheduleSlot],
                             teachers: Sequence[Teacher],
                             days: Sequence[str] = WEEKDAYS) -> pd.DataFrame:
        """
        Generate a report on teacher load per day.

        Args:
            schedule: Schedule slots
            teachers: Teacher roster

        Returns:
            DataFrame with one row per teacher and day
        """
        schedule_df = cls.convert_to_schedule_df(schedule, days)
        load = schedule_df.groupby(['teacher_id', 'day'], observed=True).size().to_dict()

        rows = []
        for teacher in teachers:
            for day in days:
                periods = int(load.get((teacher.id, day), 0))
                rows.append({
                    'Teacher ID': teacher.id,
                    'Teacher': teacher.name,
                    'Day': day,
                    'Periods': periods,
                    'Max Per Day': teacher.max_hours_per_day,
                    'Utilization': periods / teacher.max_hours_per_day if teacher.max_hours_per_day > 0 else 0
                })

        return pd.DataFrame(rows)

    @staticmethod
    def summarize_schedule(schedule: Sequence[ScheduleSlot]) -> Dict[str, int]:
        """Count slots and distinct teachers, classes and subjects in a schedule."""
        return {
            'total_slots': len(schedule),
            'unique_teachers': len({slot.teacher_id for slot in schedule}),
            'unique_classes': len({slot.class_id for slot in schedule}),
            'unique_subjects': len({slot.subject for slot in schedule})
        }
