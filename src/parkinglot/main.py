# File: src/parkinglot/main.py
"""
Main application entry point for the Parking Lot Command Processor

Usage:
    parking-lot                 # interactive, reads commands from stdin
    parking-lot commands.txt    # batch, reads commands from a file
    parking-lot --demo          # replays the bundled sample session
"""

from pathlib import Path
from typing import List, Optional
import argparse
import sys

from pydantic import ValidationError

from .application.manager import ParkingLotManager
from .infrastructure.config import load_settings
from .infrastructure.io import CommandSession, load_resource_lines, open_line_source
from .infrastructure.logging_setup import setup_logging


DEMO_RESOURCE = "commands.txt"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parking-lot",
        description="Line-oriented parking lot command processor"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument('input_file', nargs='?', type=Path, default=None,
                        help='File with one command per line (default: stdin)')
    source.add_argument('--demo', action='store_true',
                        help='Replay the bundled sample session')
    parser.add_argument('--include-empty', action='store_true', default=None,
                        help='Show empty slots in status output')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=None, help='Log level (default: from settings)')
    parser.add_argument('--log-file', default=None,
                        help='Also write logs to this file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            log_level=args.log_level,
            log_file=args.log_file,
            include_empty_in_status=args.include_empty
        )
    except ValidationError as e:
        print(f"parking-lot: invalid settings: {e}", file=sys.stderr)
        return 1
    logger = setup_logging(settings)

    manager = ParkingLotManager(include_empty_in_status=settings.include_empty_in_status)
    session = CommandSession(manager, exit_command=settings.exit_command)

    if args.demo:
        session.run_to(load_resource_lines(DEMO_RESOURCE), sys.stdout)
        return 0

    try:
        with open_line_source(args.input_file) as lines:
            session.run_to(lines, sys.stdout)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read commands: {e}")
        print(f"parking-lot: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
