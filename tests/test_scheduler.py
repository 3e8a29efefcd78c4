"""
Tests for the scheduler service, its results and progress reporting.
"""
import logging

import pytest

from timetable_scheduler.algorithms.backtracking import BacktrackingSearch, Checkpoint
from timetable_scheduler.config import SchedulerConfig
from timetable_scheduler.models.entities import (
    Teacher, ClassSubject, ClassConstraints, SchoolClass
)
from timetable_scheduler.progress import ProgressReporter
from timetable_scheduler.scheduler import (
    TimetableScheduler, generate_schedule, EXHAUSTED_CONFLICTS
)


class TestScenarios:
    """End-to-end scenarios through the single entry point."""

    def test_trivial_success(self, math_teacher, single_class):
        result = generate_schedule([math_teacher], [single_class])

        assert result.success is True
        assert len(result.schedule) == 2
        assert all(s.class_name == '1A' and s.teacher_id == 'T001' for s in result.schedule)
        assert all(s.subject == 'Math' for s in result.schedule)
        assert result.stats.filled_slots == 2
        assert result.stats.total_slots == 5 * 6 * 1
        assert result.stats.iterations > 0
        assert result.stats.duration_ms >= 0

    def test_missing_teacher(self):
        school_class = SchoolClass(id='C001', name='1A', grade='Grade 1',
                                   subjects=[ClassSubject('Physics', 2)])
        result = generate_schedule([], [school_class])

        assert result.success is False
        assert result.schedule == []
        assert any('Physics' in conflict for conflict in result.conflicts)

    def test_grade_mismatch(self):
        teacher = Teacher(id='T001', name='Nour', subject='Art', allowed_grades={'Grade 7'})
        school_class = SchoolClass(id='C001', name='1A', grade='Grade 1',
                                   subjects=[ClassSubject('Art', 1)])
        result = generate_schedule([teacher], [school_class])

        assert result.success is False
        assert any('grade Grade 1' in conflict for conflict in result.conflicts)

    def test_overload_exhausts_search(self):
        teacher = Teacher(id='T001', name='David Jones', subject='Math', max_hours_per_day=1,
                          available_days=['Monday'])
        school_class = SchoolClass(
            id='C001', name='1A', grade='Grade 1',
            subjects=[ClassSubject('Math', 2)],
            constraints=ClassConstraints(max_hours_per_day=1)
        )
        result = generate_schedule([teacher], [school_class])

        assert result.success is False
        assert result.conflicts == EXHAUSTED_CONFLICTS
        assert result.stats is None

    def test_feasibility_failure_performs_no_search(self):
        school_class = SchoolClass(id='C001', name='1A', grade='Grade 1',
                                   subjects=[ClassSubject('Physics', 2)])
        lines = []
        result = TimetableScheduler(SchedulerConfig(checkpoint_interval=1)).generate(
            [], [school_class], on_log=lines.append
        )

        assert result.success is False
        assert not any('backtracking' in line for line in lines)

    def test_school_roster(self, school_teachers, school_classes):
        result = generate_schedule(school_teachers, school_classes)

        assert result.success is True
        assert result.stats.filled_slots == 20
        assert result.stats.total_slots == 5 * 6 * 2

    def test_malformed_constraint_raises(self, math_teacher):
        school_class = SchoolClass(
            id='C001', name='1A', grade='Grade 1',
            subjects=[ClassSubject('Math', 1)],
            constraints=ClassConstraints(preferred_start='Period 4', preferred_end='Period 1')
        )
        with pytest.raises(ValueError):
            generate_schedule([math_teacher], [school_class])

    def test_empty_rosters_succeed_with_warnings(self):
        lines = []
        result = generate_schedule([], [], on_log=lines.append)

        assert result.success is True
        assert result.schedule == []
        assert result.stats.total_slots == 0
        assert 'No teachers have been added' in lines
        assert 'No classes have been added' in lines

    def test_incomplete_schedule_logged_as_violation(self, math_teacher, single_class,
                                                     monkeypatch, caplog):
        monkeypatch.setattr(BacktrackingSearch, 'schedule',
                            property(lambda search: list(search.tracker.schedule)[:-1]))

        with caplog.at_level(logging.ERROR, logger='timetable_scheduler.scheduler'):
            generate_schedule([math_teacher], [single_class])

        assert any('Schedule violation' in r.message and '1A has 1 periods of Math' in r.message
                   for r in caplog.records)


class TestReporting:
    """Test log lines and progress reported during generation."""

    def test_start_lines_echo_input_sizes(self, math_teacher, single_class):
        lines = []
        generate_schedule([math_teacher], [single_class], on_log=lines.append)

        assert lines[0] == 'Starting schedule generation...'
        assert 'Teachers: 1' in lines
        assert 'Classes: 1' in lines
        assert 'Total required periods: 2' in lines

    def test_progress_capped_until_success(self, school_teachers, school_classes):
        values = []
        scheduler = TimetableScheduler(SchedulerConfig(checkpoint_interval=1))
        result = scheduler.generate(school_teachers, school_classes, on_progress=values.append)

        assert result.success is True
        assert values[-1] == 100.0
        assert all(v <= 95.0 for v in values[:-1])
        assert values == sorted(values)

    def test_no_completion_on_failure(self):
        teacher = Teacher(id='T001', name='David Jones', subject='Math', max_hours_per_day=1,
                          available_days=['Monday'])
        school_class = SchoolClass(
            id='C001', name='1A', grade='Grade 1',
            subjects=[ClassSubject('Math', 2)],
            constraints=ClassConstraints(max_hours_per_day=1)
        )
        values = []
        scheduler = TimetableScheduler(SchedulerConfig(checkpoint_interval=1))
        scheduler.generate([teacher], [school_class], on_progress=values.append)

        assert values
        assert 100.0 not in values

    def test_checkpoint_lines_are_coarse(self, school_teachers, school_classes):
        lines = []
        scheduler = TimetableScheduler(SchedulerConfig(checkpoint_interval=10))
        result = scheduler.generate(school_teachers, school_classes, on_log=lines.append)

        progress_lines = [line for line in lines if line.startswith('Processing requirement')]
        assert len(progress_lines) == result.stats.iterations // 10

    def test_generate_steps_yields_checkpoints(self, math_teacher, single_class):
        scheduler = TimetableScheduler(SchedulerConfig(checkpoint_interval=1))
        steps = scheduler.generate_steps([math_teacher], [single_class])

        checkpoints = []
        while True:
            try:
                checkpoints.append(next(steps))
            except StopIteration as stop:
                result = stop.value
                break

        assert all(isinstance(c, Checkpoint) for c in checkpoints)
        assert len(checkpoints) == result.stats.iterations
        assert result.success is True


class TestProgressReporter:
    """Test the progress reporter on its own."""

    def test_clamps_and_never_decreases(self):
        values = []
        reporter = ProgressReporter(on_progress=values.append, cap=95.0)

        reporter.report(40)
        reporter.report(20)
        reporter.report(120)
        reporter.report(-5)

        assert values == [40, 40, 95.0, 95.0]

    def test_complete_reports_hundred(self):
        values = []
        reporter = ProgressReporter(on_progress=values.append)
        reporter.complete()
        assert values == [100.0]

    def test_callbacks_are_optional(self):
        reporter = ProgressReporter()
        reporter.log('hello')
        reporter.report(10)
        assert reporter.lines == ['hello']
        assert reporter.progress == 10


class TestResults:
    """Test result serialisation."""

    def test_success_to_dict(self, math_teacher, single_class):
        data = generate_schedule([math_teacher], [single_class]).to_dict()

        assert data['success'] is True
        assert len(data['schedule']) == 2
        assert data['schedule'][0]['class_name'] == '1A'
        assert data['stats']['filled_slots'] == 2
        assert 'conflicts' not in data

    def test_failure_to_dict(self):
        school_class = SchoolClass(id='C001', name='1A', grade='Grade 1',
                                   subjects=[ClassSubject('Physics', 2)])
        data = generate_schedule([], [school_class]).to_dict()

        assert data['success'] is False
        assert data['message']
        assert len(data['conflicts']) == 1
        assert 'schedule' not in data


class TestSchedulerConfig:
    """Test configuration validation."""

    def test_defaults(self):
        config = SchedulerConfig()
        assert config.checkpoint_interval == 100
        assert config.progress_cap == 95.0
        assert len(config.days) == 5
        assert len(config.periods) == 6

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            SchedulerConfig(checkpoint_interval=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('TIMETABLE_CHECKPOINT_INTERVAL', '7')
        assert SchedulerConfig.from_env().checkpoint_interval == 7

    def test_from_env_invalid(self, monkeypatch):
        monkeypatch.setenv('TIMETABLE_CHECKPOINT_INTERVAL', 'often')
        with pytest.raises(ValueError):
            SchedulerConfig.from_env()
