#!/usr/bin/env python3
"""
Command-line interface for the timetable scheduler.
Provides a simple way to generate a timetable from the command line.
"""
import argparse
import logging
import json
import sys
from pathlib import Path

from .config import SchedulerConfig
from .data.converter import DataConverter
from .data.loader import ScheduleDataLoader
from .scheduler import TimetableScheduler


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='School Timetable Scheduler CLI',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--input-dir',
        type=str,
        help='Directory containing Teachers.csv, Classes.csv and Class_Subjects.csv'
    )
    source.add_argument(
        '--roster',
        type=str,
        help='JSON file with "teachers" and "classes" lists'
    )

    parser.add_argument(
        '--checkpoint-interval',
        type=int,
        default=None,
        help='Search steps between progress checkpoints (default: from environment or 100)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='INFO',
        help='Logging level'
    )

    parser.add_argument(
        '--json-output',
        action='store_true',
        help='Output results as JSON'
    )

    return parser.parse_args(argv)


def setup_logging(log_level):
    """Configure logging."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {log_level}')

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_roster(args):
    """Load teachers and classes from CSV files or a JSON roster."""
    converter = DataConverter()

    if args.roster:
        roster_path = Path(args.roster)
        if not roster_path.exists():
            raise FileNotFoundError(f"Roster file does not exist: {roster_path}")
        with open(roster_path, encoding='utf-8') as f:
            return converter.convert_roster(json.load(f))

    data = ScheduleDataLoader(args.input_dir).load_all()
    teachers = converter.convert_teachers(data['teachers'])
    classes = converter.convert_classes(data['classes'], data['class_subjects'])
    return teachers, classes


def main(argv=None):
    """Main entry point for the CLI."""
    # Parse command-line arguments
    args = parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)

    try:
        config = SchedulerConfig.from_env()
        if args.checkpoint_interval is not None:
            config = SchedulerConfig(checkpoint_interval=args.checkpoint_interval)

        teachers, classes = load_roster(args)

        scheduler = TimetableScheduler(config)
        result = scheduler.generate(teachers, classes)

        # Display results
        if args.json_output:
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            print("\nScheduling Results:")

            if result.success:
                summary = DataConverter.summarize_schedule(result.schedule)
                print(f"  Periods scheduled: {result.stats.filled_slots}/{result.stats.total_slots}")
                print(f"  Teachers used: {summary['unique_teachers']}")
                print(f"  Classes scheduled: {summary['unique_classes']}")
                print(f"  Subjects scheduled: {summary['unique_subjects']}")

                print("\nTeacher load (periods per week):")
                report = DataConverter.generate_load_report(result.schedule, teachers, config.days)
                if not report.empty:
                    for teacher_name, periods in report.groupby('Teacher', sort=False)['Periods'].sum().items():
                        print(f"  {teacher_name}: {periods}")

                print("\nPerformance metrics:")
                print(f"  iterations: {result.stats.iterations}")
                print(f"  duration: {result.stats.duration_ms} ms")
            else:
                print(f"  Error: {result.message}")
                for conflict in result.conflicts:
                    print(f"  - {conflict}")

        if not result.success:
            sys.exit(1)

    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {str(e)}")
        sys.exit(1)


if __name__ == '__main__':
    main()
