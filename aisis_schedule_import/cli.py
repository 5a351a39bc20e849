"""
Command-line interface: parse a pasted AISIS schedule and export it.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .config import get_config
from .courses import detect_conflicts, summarize_courses
from .errors import ScheduleParseError
from .export import export
from .grammar import DAY_LABELS
from .html_input import parse_schedule_html
from .logging import setup_logging
from .parser import parse_aisis_schedule


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {p}")
    return p.read_text(encoding="utf-8", errors="ignore")


def _print_blocks(blocks) -> None:
    print("Day  | Time        | Course       | Section | Room")
    print("-" * 60)
    for b in blocks:
        print(
            f"{DAY_LABELS[b.day - 1]:<4} | {b.start_time}-{b.end_time} | "
            f"{b.course_code:<12} | {b.section:<7} | {b.room}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aisis-schedule-import",
        description=(
            "Turn the class schedule copied from AISIS into structured blocks.\n"
            "Paste the whole table, including the 'Time Mon Tue ...' header row."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Text file with the pasted schedule. Default: read from stdin.",
    )
    parser.add_argument(
        "--html",
        metavar="HTML_PATH",
        help="Parse a saved AISIS schedule page instead of pasted text.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output path (without extension). If omitted, blocks are printed.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["ics", "csv", "json"],
        default="json",
        help="Export format. Default: json",
    )
    parser.add_argument(
        "--term-start",
        metavar="YYYY-MM-DD",
        help="(ics) First day of classes, e.g. 2026-08-10.",
    )
    parser.add_argument(
        "--term-end",
        metavar="YYYY-MM-DD",
        help="(ics) Last day of classes, e.g. 2026-12-05.",
    )
    parser.add_argument(
        "--debug",
        metavar="PATH",
        help="Write the parser's debug trace as JSON to PATH.",
    )
    parser.add_argument(
        "--list-courses",
        action="store_true",
        help="List distinct courses with meetings per week, then exit.",
    )
    parser.add_argument(
        "--conflicts",
        action="store_true",
        help="Report overlapping classes.",
    )
    parser.add_argument("--log-level", help="Log level (default from AISIS_LOG_LEVEL).")
    parser.add_argument("--log-json", action="store_true", help="Log as JSON lines.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    setup_logging(
        json_output=args.log_json or config.log_json,
        log_level=args.log_level or config.log_level,
    )

    try:
        if args.html:
            result = parse_schedule_html(html_path=args.html, with_debug=True)
        else:
            result = parse_aisis_schedule(_read_input(args.input), with_debug=True)
    except ScheduleParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    blocks = result.blocks

    if args.debug:
        Path(args.debug).write_text(
            json.dumps(result.debug.model_dump(by_alias=True), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    for issue in result.debug.common_issues:
        print(f"[{issue.severity}] {issue.message}", file=sys.stderr)

    if args.list_courses:
        print("Course       | Section | Meetings/week")
        print("-" * 40)
        for c in summarize_courses(blocks):
            print(f"{c.course_code:<12} | {c.section:<7} | {c.frequency}")
        return 0

    if args.conflicts:
        conflicts = detect_conflicts(blocks)
        for c in conflicts:
            print(f"Conflict: {c.message}", file=sys.stderr)
        if not conflicts:
            print("No conflicts found.", file=sys.stderr)

    if not args.output:
        _print_blocks(blocks)
        return 0

    ext = {"ics": ".ics", "csv": ".csv", "json": ".json"}[args.format]
    out_path = Path(args.output) if Path(args.output).suffix else Path(args.output + ext)
    try:
        export(blocks, out_path, args.format, args.term_start, args.term_end)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Exported {len(blocks)} block(s) to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
