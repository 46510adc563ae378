#!/usr/bin/env python3
"""
Track time for tasks.

Usage:
    foliot clockin
    foliot clockout "reviewed pull requests"
    foliot -n side-project clock 1.5 --starting 9:30 "planning"
    foliot summarize --tail 12
"""

import argparse
import re
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from foliot.core import storage
from foliot.core.config import (
    DEFAULT_NAMESPACE,
    DEFAULT_TAIL,
    DEFAULT_WRAP,
    ENTRY_HEADERS,
    LOG_LEVEL,
    LOG_TO_FILE,
    OUTPUT_DIR,
    SUMMARY_HEADERS,
)
from foliot.core.errors import FoliotError, NotFoundError, ParseError
from foliot.core.logger import configure_logging
from foliot.core.storage import DataStore
from foliot.core.timeparse import parse_span, parse_starting_value
from foliot.models.entries import Entry
from foliot.services import clock, external, reports
from foliot.services.entries import EntryPredicate, list_entries

STARTING_HELP = "Starting time (e.g. 2015-09-18T23:56:04, 18.09.2015-23:56, 18.09.2015 23:56 or 23:56)"


# =============================================================================
# HELPERS
# =============================================================================


def comment_filter(pattern: str | None) -> EntryPredicate | None:
    """
    Build a predicate matching entry comments against a regex.

    Entries without a comment always match.
    """
    if pattern is None:
        return None
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise ParseError(pattern, what="filter", detail=str(e)) from e

    def predicate(entry: Entry) -> bool:
        return entry.comment is None or regex.search(entry.comment) is not None

    return predicate


def render_table(console: Console, headers: list[str], rows: list[list[str]], wrap: int | None = None):
    table = Table(show_lines=False)
    for idx, header in enumerate(headers):
        is_last = idx == len(headers) - 1
        table.add_column(
            header,
            justify="left" if idx == 0 or is_last else "center",
            max_width=wrap if is_last else None,
            overflow="fold",
        )
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))
    console.print(table)


def describe_command(args: argparse.Namespace) -> str:
    """One-line description of the command, used as git commit message."""
    parts = [args.command]
    if args.command == "clockin" and args.starting:
        parts.append(f'--starting "{args.starting}"')
    elif args.command == "clockout" and args.comment:
        parts.append(f'"{args.comment}"')
    elif args.command == "clock":
        if args.starting:
            parts.append(f'--starting "{args.starting}"')
        parts.append(args.span)
        if args.comment:
            parts.append(f'"{args.comment}"')
    elif args.command == "edit" and args.clockin:
        parts.append("--clockin")
    elif args.command == "git":
        parts.extend(f'"{arg}"' for arg in args.git_args)
    elif args.command == "path" and args.path_namespace:
        parts.append(f'--namespace "{args.path_namespace}"')
    elif args.command in ("show", "summarize", "export"):
        if args.filter:
            parts.append(f'--filter "{args.filter}"')
        if args.command != "export":
            parts.append(f"--tail {args.tail}")
        if args.command == "show":
            parts.append(f"--wrap {args.wrap}")
    return " ".join(parts)


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_abort(args, store: DataStore, console: Console):
    clock.abort(store, args.namespace)
    print(f"Aborted clock for namespace '{args.namespace}'")


def print_entry(namespace: str, entry: Entry):
    print(f"Adding entry for namespace '{namespace}':")
    print(f"\t starting at {entry.start_time}")
    print(f"\t ending at   {entry.end_time}")
    print(f"\t duration:   {entry.duration}")
    if entry.comment:
        print(f"\t comment:    {entry.comment}")


def cmd_clock(args, store: DataStore, console: Console):
    span = parse_span(args.span)
    starting = parse_starting_value(args.starting) if args.starting else None
    entry = clock.clock_duration(store, args.namespace, span, starting, args.comment)
    print_entry(args.namespace, entry)


def cmd_clockin(args, store: DataStore, console: Console):
    starting = parse_starting_value(args.starting) if args.starting else None
    marker = clock.clock_in(store, args.namespace, starting)
    print(f"Starting clock for namespace '{args.namespace}' ({marker.start_time})")


def cmd_clockout(args, store: DataStore, console: Console):
    entry = clock.clock_out(store, args.namespace, args.comment)
    print_entry(args.namespace, entry)


def cmd_edit(args, store: DataStore, console: Console):
    external.edit(store, args.namespace, clockin=args.clockin)


def cmd_git(args, store: DataStore, console: Console):
    external.git(store, args.git_args)


def cmd_path(args, store: DataStore, console: Console):
    if args.path_namespace:
        if not storage.entries_exist(store, args.path_namespace):
            raise NotFoundError(f"Path not found for namespace '{args.path_namespace}'")
        print(store.path(storage.entries_key(args.path_namespace)))
    else:
        if not store.root.is_dir():
            raise NotFoundError(f"Path not found: {store.root}")
        print(store.root)


def cmd_show(args, store: DataStore, console: Console):
    entries = storage.load_entries(store, args.namespace)
    rows = list_entries(entries, comment_filter(args.filter), args.tail)
    render_table(console, ENTRY_HEADERS, [row.as_list() for row in rows], wrap=args.wrap)


def cmd_status(args, store: DataStore, console: Console):
    current = clock.status(store, args.namespace)
    if current is None:
        print(f"Clock is not running for namespace '{args.namespace}'")
        return
    print(f"Clock running for namespace '{args.namespace}':")
    print(f"\t started {current.start_time}")
    print(f"\t running {current.running}")


def cmd_summarize(args, store: DataStore, console: Console):
    entries = storage.load_entries(store, args.namespace)
    summaries = reports.summarize(entries, comment_filter(args.filter), args.tail)
    render_table(console, SUMMARY_HEADERS, [s.as_list() for s in summaries])


def cmd_export(args, store: DataStore, console: Console):
    entries = storage.load_entries(store, args.namespace)
    output_path = args.output or OUTPUT_DIR / f"{args.namespace}.xlsx"
    reports.create_excel_report(entries, output_path, comment_filter(args.filter))
    print(f"Saved Excel report to: {output_path}")


# =============================================================================
# PARSER
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="foliot", description="Tracks time for tasks")
    parser.add_argument(
        "-n", "--namespace",
        default=DEFAULT_NAMESPACE,
        help="The namespace to apply the command to",
    )
    parser.add_argument(
        "-g", "--git-commit",
        action="store_true",
        help='Run `git commit -am "[<namespace>] <action>"` afterwards',
    )
    parser.add_argument(
        "-p", "--git-push",
        action="store_true",
        help="Pull, rebase and push git repository afterwards",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    sub = subparsers.add_parser("abort", help="Abort current timer")
    sub.set_defaults(handler=cmd_abort)

    sub = subparsers.add_parser("clock", help="Clock an arbitrary time")
    sub.add_argument("span", help="Time to log: hours (1.5 or 2h) or minutes (90m)")
    sub.add_argument("comment", nargs="?", help="Comment on the clock entry")
    sub.add_argument("-s", "--starting", help=STARTING_HELP)
    sub.set_defaults(handler=cmd_clock)

    sub = subparsers.add_parser("clockin", help="Start the timer")
    sub.add_argument("-s", "--starting", help=STARTING_HELP)
    sub.set_defaults(handler=cmd_clockin)

    sub = subparsers.add_parser("clockout", help="Stop the timer and save the entry")
    sub.add_argument("comment", nargs="?", help="Comment on the clock entry")
    sub.set_defaults(handler=cmd_clockout)

    sub = subparsers.add_parser("edit", help="Edit entries or clockin file")
    sub.add_argument("-c", "--clockin", action="store_true", help="Edit clockin file")
    sub.set_defaults(handler=cmd_edit)

    sub = subparsers.add_parser("git", help="Execute git command in foliot directory")
    sub.add_argument("git_args", nargs=argparse.REMAINDER, help="Arguments to pass to git")
    sub.set_defaults(handler=cmd_git)

    sub = subparsers.add_parser("path", help="Print path to the data directory")
    sub.add_argument(
        "-n", "--namespace",
        dest="path_namespace",
        help="Print path to the given namespace entry file",
    )
    sub.set_defaults(handler=cmd_path)

    sub = subparsers.add_parser("show", help="Show entries in a table")
    sub.add_argument("-f", "--filter", help="Filter entries with regex")
    sub.add_argument("-t", "--tail", type=int, default=DEFAULT_TAIL, help="Only show last n entries (0 to show all)")
    sub.add_argument("-w", "--wrap", type=int, default=DEFAULT_WRAP, help="Wrap content column at x chars")
    sub.set_defaults(handler=cmd_show)

    sub = subparsers.add_parser("status", help="Print current status of clock timer")
    sub.set_defaults(handler=cmd_status)

    sub = subparsers.add_parser("summarize", help="Create a per-month summary")
    sub.add_argument("-f", "--filter", help="Filter entries with regex")
    sub.add_argument("-t", "--tail", type=int, default=DEFAULT_TAIL, help="Only show last n months (0 to show all)")
    sub.set_defaults(handler=cmd_summarize)

    sub = subparsers.add_parser("export", help="Write entries and monthly summary to an Excel file")
    sub.add_argument("-f", "--filter", help="Filter entries with regex")
    sub.add_argument("-o", "--output", type=_path, help="Output .xlsx file")
    sub.set_defaults(handler=cmd_export)

    return parser


def _path(value: str) -> Path:
    return Path(value).expanduser()


# =============================================================================
# MAIN
# =============================================================================


def run(argv: list[str] | None = None, store: DataStore | None = None, console: Console | None = None) -> int:
    """Run one command; returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(LOG_LEVEL, persistent=LOG_TO_FILE)

    if not args.namespace:
        print("The namespace parameter must not be empty")
        return 1

    store = store or DataStore()
    console = console or Console()

    try:
        args.handler(args, store, console)

        if args.git_commit:
            message = f"[{args.namespace}] {describe_command(args)}"
            print(f'\n=> git commit -am "{message}"')
            external.commit(store, args.namespace, describe_command(args))

            if args.git_push:
                print("\n=> git pull --rebase && git push")
                external.sync(store)
    except FoliotError as e:
        print(f"Error: {e}")
        return 1

    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
