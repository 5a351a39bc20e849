"""
Parse text copied from the AISIS "My Class Schedule" page into schedule blocks.

Pipeline: segment rows by time slot → collapse each slot's lines into day
columns → classify cells → assemble and merge blocks. Only a missing header
or a missing set of time slots is fatal; everything else is best effort and
explained in the debug trace.
"""
from __future__ import annotations

from typing import List, overload, Literal

from .assembler import UNUSABLE_SLOT_REASON, CollapsedRow, assemble_blocks
from .config import get_config
from .grammar import ROOM_CODE_RX, match_time_range
from .lanes import collapse_row_group
from .logging import get_logger
from .models import ColumnExtraction, DebugTrace, LaneDebug, ParseResult, ScheduleBlock
from .segmenter import segment_schedule_text

log = get_logger(__name__)


@overload
def parse_aisis_schedule(pasted_text: str) -> List[ScheduleBlock]: ...
@overload
def parse_aisis_schedule(pasted_text: str, with_debug: Literal[False]) -> List[ScheduleBlock]: ...
@overload
def parse_aisis_schedule(pasted_text: str, with_debug: Literal[True]) -> ParseResult: ...


def parse_aisis_schedule(pasted_text: str, with_debug: bool = False):
    """
    Parse pasted AISIS schedule text.

    :param pasted_text: Clipboard contents of the AISIS schedule page.
    :param with_debug: Return a ParseResult with the debug trace instead of
        only the blocks.
    :raises HeaderNotFoundError: no 'Time ... Mon' header row.
    :raises NoTimeSlotsError: header found but no time-slot rows.
    """
    trace = DebugTrace()
    segmentation = segment_schedule_text(pasted_text, trace.raw_analysis)
    probe_limit = get_config().lane_probe_limit

    rows: List[CollapsedRow] = []
    for group in segmentation.groups:
        lane_debug = LaneDebug()
        cols = collapse_row_group(group.lines, lane_debug, probe_limit=probe_limit)

        # Fall back to the raw first line if the resolver lost the time text.
        time_cell = cols[0] or group.time_text

        trace.column_extractions.append(
            ColumnExtraction(
                time_slot=time_cell,
                line_number=group.line_number,
                collapsed_columns=cols,
                cells_with_content=[i for i, c in enumerate(cols) if c.strip()],
                **lane_debug.model_dump(),
            )
        )
        rows.append(CollapsedRow(time_text=time_cell, columns=cols, line_number=group.line_number))

        if lane_debug.end_of_table_tripped:
            break

    blocks = assemble_blocks(rows, trace)
    classify_common_issues(trace)

    log.info(
        "schedule_parsed",
        time_slots=len(rows),
        blocks=len(blocks),
        issues=len(trace.common_issues),
    )

    if with_debug:
        return ParseResult(blocks=blocks, debug=trace)
    return blocks


def classify_common_issues(trace: DebugTrace) -> None:
    """Summarize the trace into user-facing hints with a severity."""
    rejected = [
        v
        for v in trace.validation_results
        if v.result == "rejected" and v.reason != UNUSABLE_SLOT_REASON
    ]
    room_codes = [v for v in rejected if ROOM_CODE_RX.match(v.cell_content)]
    if room_codes:
        trace.add_issue(
            "regex",
            "warning",
            f"{len(room_codes)} cells rejected as room codes (e.g., {room_codes[0].cell_content})",
            _line_numbers(room_codes),
        )
    other_rejected = [v for v in rejected if v not in room_codes]
    if other_rejected:
        trace.add_issue(
            "regex",
            "info",
            f"{len(other_rejected)} cells did not start with a course code and were skipped",
            _line_numbers(other_rejected),
        )

    wrong_width = [e for e in trace.column_extractions if len(e.collapsed_columns) != 7]
    if wrong_width:
        trace.add_issue(
            "alignment",
            "error",
            f"{len(wrong_width)} time slots have incorrect column count (expected 7)",
            _line_numbers(wrong_width),
        )

    overflow = [e for e in trace.column_extractions if e.alignment_overflow]
    if overflow:
        trace.add_issue(
            "alignment",
            "warning",
            f"{len(overflow)} time slots had more than 6 day columns (alignment overflow)",
            _line_numbers(overflow),
        )

    merged = [e for e in trace.column_extractions if e.multiple_time_slots]
    if merged:
        trace.add_issue(
            "format",
            "warning",
            f"{len(merged)} time slots contained another time range; lines after it were skipped",
            _line_numbers(merged),
        )

    orphans = [
        e for e in trace.column_extractions
        if any(ev.type == "detail_orphan" and ev.text for ev in e.lane_events)
    ]
    if orphans:
        trace.add_issue(
            "alignment",
            "info",
            f"{len(orphans)} time slots had detail lines with no course to attach to",
            _line_numbers(orphans),
        )

    unreadable = [e for e in trace.column_extractions if not match_time_range(e.time_slot)]
    if unreadable:
        trace.add_issue(
            "format",
            "error",
            f"{len(unreadable)} time slots have no readable time range",
            _line_numbers(unreadable),
        )

    footer = trace.raw_analysis.footer_lines_ignored
    if footer:
        trace.add_issue(
            "footer",
            "info",
            f'{footer} footer lines were ignored (e.g., "Home", "Privacy Policy")',
        )


def _line_numbers(items) -> List[int]:
    return [i.line_number for i in items if i.line_number is not None]
