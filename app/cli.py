"""Command-line entry point for the job tracker."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from app.context import AppContext
from core.config import Settings
from core.errors import ConfigValidationError, JobTrackerError, NotFoundError
from core.log import configure_logging
from schemas.job_entry import ALL_FILTER, FILTER_OPTIONS, STATUSES, JobEntry, JobStatus
from tracker.store import JobStore

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-tracker",
        description="Track job applications from the command line.",
    )
    parser.add_argument("--prefs", type=Path, help="Preference file (overrides settings)")
    parser.add_argument("--seeds", type=Path, help="YAML file with demonstration entries")
    parser.add_argument("--log-level", help="Logging level (overrides settings)")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Show jobs, optionally filtered")
    list_cmd.add_argument("--status", default=ALL_FILTER, help=f"One of: {', '.join(FILTER_OPTIONS)}")
    list_cmd.add_argument("--query", "-q", default="", help="Search title or company")

    add_cmd = sub.add_parser("add", help="Add a job")
    add_cmd.add_argument("title")
    add_cmd.add_argument("company")
    add_cmd.add_argument("--status", default=JobStatus.WISHLIST.value)

    # Entry ids do not survive a restart, so the CLI addresses jobs by the
    # 1-based position shown by `list`.
    status_cmd = sub.add_parser("set-status", help="Change the status of a job")
    status_cmd.add_argument("position", type=int)
    status_cmd.add_argument("status")

    delete_cmd = sub.add_parser("delete", help="Delete a job")
    delete_cmd.add_argument("position", type=int)

    sub.add_parser("statuses", help="Show the available statuses")

    return parser


def format_entry(position: int, entry: JobEntry) -> str:
    return f"{position:>3d}. {entry.status:<10s} {entry.title} @ {entry.company}"


def resolve_position(store: JobStore, position: int) -> JobEntry:
    """Map a 1-based list position to the entry currently there."""
    entries = store.entries
    if not 1 <= position <= len(entries):
        raise NotFoundError(f"#{position}")
    return entries[position - 1]


def run_command(args: argparse.Namespace, context: AppContext) -> None:
    """Execute one parsed command against the context's store."""
    store = context.store

    if args.command == "list":
        positions = {entry.id: i for i, entry in enumerate(store.entries, start=1)}
        jobs = store.filter_and_search(args.status, args.query)
        print(f"My jobs ({len(jobs)})")
        for entry in jobs:
            print(format_entry(positions[entry.id], entry))
    elif args.command == "add":
        entry = store.add(args.title, args.company, args.status)
        print(f"Added {format_entry(1, entry)}")
    elif args.command == "set-status":
        entry = store.update_status(resolve_position(store, args.position), args.status)
        print(f"Updated {format_entry(args.position, entry)}")
    elif args.command == "delete":
        entry = resolve_position(store, args.position)
        store.delete(entry)
        print(f"Deleted {entry.title} @ {entry.company}")
    elif args.command == "statuses":
        for name in STATUSES:
            print(name)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the job-tracker command."""
    args = build_parser().parse_args(argv)

    overrides: dict[str, object] = {"background_saves": False}
    if args.prefs:
        overrides["prefs_path"] = str(args.prefs)
    if args.log_level:
        overrides["log_level"] = args.log_level
    try:
        settings = Settings(**overrides)
    except PydanticValidationError as e:
        logger.error("Configuration error", error="Invalid settings", errors=e.errors())
        return 1
    configure_logging(settings.log_level)

    try:
        context = AppContext.boot(settings, seeds_path=args.seeds)
    except ConfigValidationError as e:
        logger.error("Configuration error", error=str(e), errors=e.errors)
        return 1

    try:
        run_command(args, context)
    except JobTrackerError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        return 2
    finally:
        context.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
