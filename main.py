#!/usr/bin/env python3
"""
Entry point for the timetable scheduler.

`--mode cli` (default) generates a weekly timetable from a roster and prints
the result; any arguments it does not recognise are forwarded to
timetable_scheduler.cli. `--mode api` serves the scheduling job API.
"""
import sys
import os
import argparse
import logging

from timetable_scheduler.cli import main as cli_main
from timetable_scheduler.api import app as api_app


def parse_args():
    """Split the mode options from the arguments forwarded to the CLI."""
    parser = argparse.ArgumentParser(
        description='Generate weekly school timetables from a roster, or serve the job API',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=['cli', 'api'],
        default='cli',
        help='cli: schedule one roster and exit; api: serve /api/v1 scheduling jobs'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=int(os.environ.get('PORT', 5000)),
        help='Port of the job API (api mode only)'
    )

    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='Interface the job API binds to (api mode only)'
    )

    return parser.parse_known_args()


def main():
    args, remaining = parse_args()

    if args.mode == 'cli':
        cli_main(remaining)

    elif args.mode == 'api':
        logging.basicConfig(level=logging.INFO,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        print(f"Serving timetable jobs on {args.host}:{args.port}")
        api_app.run(host=args.host, port=args.port)

    else:
        print(f"Invalid mode: {args.mode}")
        sys.exit(1)


if __name__ == '__main__':
    main()
