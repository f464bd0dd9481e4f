#!/usr/bin/env python3
"""
LearnQuest CLI

Usage:
    learnquest <command> [options]
    python -m learnquest.cli <command> [options]

Commands:
    serve       Run the dashboard API with uvicorn
    scan        Rescan COURSE_PATH and rewrite data.json
    stats       Show XP, level, streak and achievements
    reset       Reset gamification data to defaults

Environment:
    COURSE_PATH             Course roots, separated by ',' or ';'
    LEARNQUEST_DATA_DIR     Directory holding the JSON files
    LOG_LEVEL               DEBUG|INFO|WARNING|ERROR
"""
import sys
import argparse
import logging
from typing import Optional

from learnquest import __version__
from learnquest.cli.commands import ResetCommand, ScanCommand, ServeCommand, StatsCommand
from learnquest.config import settings


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="learnquest",
        description="LearnQuest course dashboard CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s serve --port 4000
  %(prog)s scan --path ~/Courses
  %(prog)s stats
  %(prog)s reset --yes
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    parser.add_argument(
        "--log-level",
        default=settings.log_level if settings.log_level in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding the JSON files (default: LEARNQUEST_DATA_DIR)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without writing anything"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    serve_parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    # scan
    scan_parser = subparsers.add_parser("scan", help="Rescan course folders")
    scan_parser.add_argument(
        "--path", "-p",
        action="append",
        dest="paths",
        help="Course root to scan (repeatable, default: COURSE_PATH)"
    )

    # stats
    subparsers.add_parser("stats", help="Show gamification summary")

    # reset
    reset_parser = subparsers.add_parser("reset", help="Reset gamification data")
    reset_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    setup_logging(parsed.log_level)

    command_map = {
        "serve": ServeCommand,
        "scan": ScanCommand,
        "stats": StatsCommand,
        "reset": ResetCommand,
    }

    if parsed.command in command_map:
        handler = command_map[parsed.command](data_dir=parsed.data_dir, dry_run=parsed.dry_run)
        return handler.execute(parsed)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
