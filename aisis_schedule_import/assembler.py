"""
Turn collapsed time-slot rows into schedule blocks.

Each day column keeps at most one block in progress. A cell continues it when
course code and section match and the previous slot ended exactly where this
one starts; anything else closes it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .cells import DEFAULT_ROOM, cell_lines, classify_cell
from .grammar import DAY_LABELS, match_time_range, to_hh_mm
from .logging import get_logger
from .models import DebugTrace, ScheduleBlock

log = get_logger(__name__)

UNUSABLE_SLOT_REASON = "Time slot not increasing"


@dataclass
class CollapsedRow:
    """Output of the lane resolver for one time slot."""

    time_text: str
    columns: List[str]
    line_number: int | None = None


@dataclass
class _Active:
    course_code: str
    section: str
    room: str
    start_time: str
    last_end: str

    def to_block(self, day_idx: int) -> ScheduleBlock:
        return ScheduleBlock(
            course_code=self.course_code,
            section=self.section,
            room=self.room,
            day=day_idx + 1,
            start_time=self.start_time,
            end_time=self.last_end,
        )


def parse_slot_times(time_text: str) -> tuple[str, str] | None:
    """'700-730' → ('07:00', '07:30')."""
    m = match_time_range(time_text or "")
    if not m:
        return None
    return to_hh_mm(m.group(1)), to_hh_mm(m.group(2))


def assemble_blocks(rows: Iterable[CollapsedRow], trace: DebugTrace | None = None) -> List[ScheduleBlock]:
    """Build blocks from rows in input order, then merge adjacent duplicates."""
    active: Dict[int, _Active] = {}
    results: List[ScheduleBlock] = []

    def close(d: int) -> None:
        a = active.pop(d, None)
        if a is not None:
            results.append(a.to_block(d))

    for row in rows:
        times = parse_slot_times(row.time_text)
        if times is None:
            log.warning("time_slot_unreadable", time=row.time_text, line=row.line_number)
            continue
        start, end = times
        time_range = f"{start}-{end}"

        if start >= end:
            log.warning("time_slot_not_increasing", time=row.time_text, line=row.line_number)
            if trace is not None:
                trace.add_issue(
                    "format",
                    "warning",
                    f"Time slot {row.time_text} does not end after it starts; its cells were ignored",
                    [row.line_number] if row.line_number else [],
                )
            for d in range(6):
                close(d)
                if trace is not None:
                    cell = row.columns[d + 1] if d + 1 < len(row.columns) else ""
                    _record_unusable(trace, cell, DAY_LABELS[d], time_range, row.line_number)
            continue

        for d in range(6):
            cell = row.columns[d + 1] if d + 1 < len(row.columns) else ""
            parsed = classify_cell(cell, DAY_LABELS[d], time_range, trace, row.line_number)
            a = active.get(d)

            if parsed is None:
                close(d)
                continue

            if (
                a is not None
                and a.course_code == parsed.course_code
                and a.section == parsed.section
                and a.last_end == start
            ):
                if a.room == DEFAULT_ROOM and parsed.room != DEFAULT_ROOM:
                    a.room = parsed.room
                a.last_end = end
                continue

            close(d)
            active[d] = _Active(
                course_code=parsed.course_code,
                section=parsed.section,
                room=parsed.room,
                start_time=start,
                last_end=end,
            )

    for d in sorted(active):
        close(d)

    return merge_adjacent(results)


def _record_unusable(
    trace: DebugTrace, cell: str, day_name: str, time_range: str, line_number: int | None
) -> None:
    lines = cell_lines(cell or "")
    trace.record_validation(
        day_name=day_name,
        time_range=time_range,
        cell_content=lines[0] if lines else "",
        result="rejected" if lines else "empty",
        reason=UNUSABLE_SLOT_REASON if lines else "No content in cell",
        line_number=line_number,
    )


def merge_adjacent(blocks: Iterable[ScheduleBlock]) -> List[ScheduleBlock]:
    """
    Sort by (day, start, course+section+room) and join neighbours with the
    same day/course/section/room whose times touch exactly.
    """
    ordered = sorted(
        blocks,
        key=lambda b: (b.day, b.start_time, b.course_code + b.section + b.room),
    )
    out: List[ScheduleBlock] = []
    for b in ordered:
        last = out[-1] if out else None
        if last is not None and last.key == b.key and last.end_time == b.start_time:
            out[-1] = last.model_copy(update={"end_time": b.end_time})
        else:
            out.append(b.model_copy())
    return out
