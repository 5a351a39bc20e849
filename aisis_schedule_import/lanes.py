"""
Collapse one time-slot group into 7 columns: time + Mon..Sat.

Browser copies of the AISIS grid break every multi-line cell across physical
lines, so one logical row arrives as something like::

    700-730	MATH 10
    A1 F201	CS 21
    B2 V201

The tab count on continuation lines says little about the day they belong to.
Cells are therefore resolved into "lanes" by ordinal position:

- a course-code cell opens a lane at the first free position at or after
  ``completed + cell_index``;
- any other non-empty cell is a detail (section / room / mode) and closes the
  nearest open lane at or after that position, falling back to the last open
  lane before it;
- an empty cell at an unoccupied position is a gap and still uses up a day.

Lanes and gaps are then laid out onto the day columns in position order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from .grammar import (
    DAY_LABELS,
    clean_cell,
    is_footer_line,
    is_valid_course_code,
    match_time_range,
    split_inline_course,
)
from .logging import get_logger
from .models import LaneDebug, LaneEvent, LaneOverview

log = get_logger(__name__)

LANE_PROBE_LIMIT = 20
COLUMN_COUNT = 7  # time + 6 days

_MULTI_NEWLINE_RE = re.compile(r"\n{2,}")


@dataclass
class Lane:
    header: str = ""
    details: List[str] = field(default_factory=list)
    state: str = "open"  # open | done

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    def text(self) -> str:
        return "\n".join(p for p in [self.header, *self.details] if p).strip()


class _LaneTable:
    """Lanes indexed directly by ordinal position (sparse, growable)."""

    def __init__(self) -> None:
        self.slots: List[Optional[Lane]] = []
        self.gaps: set[int] = set()

    def __len__(self) -> int:
        return len(self.slots)

    def at(self, pos: int) -> Optional[Lane]:
        if 0 <= pos < len(self.slots):
            return self.slots[pos]
        return None

    def put(self, pos: int, lane: Lane) -> None:
        if pos >= len(self.slots):
            self.slots.extend([None] * (pos + 1 - len(self.slots)))
        self.slots[pos] = lane

    def free_position(self, pos: int, limit: int) -> int:
        k = pos
        while k < limit and self.at(k) is not None:
            k += 1
        return k

    def open_lane_for_detail(self, pos: int) -> int:
        """Nearest open lane at or after ``pos``, else the last open lane; -1 if none."""
        k = pos
        while k < len(self.slots):
            lane = self.slots[k]
            if lane is not None and lane.is_open:
                return k
            k += 1
        for k in range(len(self.slots) - 1, -1, -1):
            lane = self.slots[k]
            if lane is not None and lane.is_open:
                return k
        return -1


def collapse_row_group(
    lines: List[str],
    debug: LaneDebug | None = None,
    probe_limit: int = LANE_PROBE_LIMIT,
) -> List[str]:
    """
    Resolve the physical lines of one time slot into
    ``[time, mon, tue, wed, thur, fri, sat]``.

    Never raises on malformed input; anomalies go to ``debug`` and the log.
    """
    if debug is not None:
        debug.raw_lines = list(lines)

    def record(**event) -> None:
        if debug is not None:
            debug.lane_events.append(LaneEvent(**event))

    if not lines:
        return [""] * COLUMN_COUNT

    table = _LaneTable()
    completed = 0

    for li, raw in enumerate(lines):
        if is_footer_line(raw):
            if debug is not None:
                debug.end_of_table_tripped = True
            log.info("end_of_table", line=raw)
            break

        cells = [clean_cell(c) for c in raw.split("\t")]
        starts_with_time = bool(match_time_range(cells[0]))

        if starts_with_time and li > 0:
            # Two time slots pasted without a separator.
            if debug is not None:
                debug.multiple_time_slots = True
            log.warning("multiple_time_slots_in_group", line=raw, line_index=li)
            break

        if starts_with_time:
            cells = cells[1:]

        base = completed

        for cj, text in enumerate(cells):
            pos = base + cj

            if not text:
                if table.at(pos) is None:
                    table.gaps.add(pos)
                record(line_index=li, cell_index=cj, type="gap", text="", pos_assigned=pos)
                continue

            if is_valid_course_code(text):
                k = table.free_position(pos, probe_limit)
                note = None
                if table.at(k) is not None:
                    note = f"probe limit {probe_limit} reached, replaced lane"
                table.put(k, Lane(header=text))
                record(line_index=li, cell_index=cj, type="header", text=text, pos_assigned=k, note=note)
                continue

            inline = split_inline_course(text) if li == 0 else None
            if inline:
                k = table.free_position(pos, probe_limit)
                code, rest = inline
                table.put(k, Lane(header=code, details=[rest], state="done"))
                completed += 1
                record(line_index=li, cell_index=cj, type="inline", text=text, pos_assigned=k)
                continue

            k = table.open_lane_for_detail(pos)
            if k >= 0:
                lane = table.slots[k]
                lane.details.append(text)
                lane.state = "done"
                completed += 1
                record(line_index=li, cell_index=cj, type="detail", text=text, pos_assigned=k)
            else:
                log.debug("orphan_detail", text=text, line_index=li, cell_index=cj)
                record(
                    line_index=li,
                    cell_index=cj,
                    type="detail_orphan",
                    text=text,
                    note="no open lane",
                )

    out = [""] * COLUMN_COUNT
    m = match_time_range(lines[0])
    out[0] = m.group(0).strip() if m else ""

    _map_lanes_to_days(table, out, debug, probe_limit)

    return [_MULTI_NEWLINE_RE.sub("\n", col).strip() for col in out]


def _map_lanes_to_days(
    table: _LaneTable,
    out: List[str],
    debug: LaneDebug | None,
    probe_limit: int,
) -> None:
    day = 1
    max_pos = max([len(table) - 1, *table.gaps, -1])
    past_sat: List[int] = []
    beyond_limit: List[int] = []

    for pos in range(max_pos + 1):
        lane = table.at(pos)

        # Positions past the probe limit are never mapped to a day.
        if day > 6 or pos > probe_limit:
            if lane is not None:
                (past_sat if day > 6 else beyond_limit).append(pos)
                if debug is not None:
                    debug.lanes_overview.append(
                        LaneOverview(
                            ordinal_pos=pos,
                            gap=False,
                            header=lane.header,
                            details=list(lane.details),
                            state=lane.state,
                            resolved_day="overflow",
                        )
                    )
            continue

        if lane is None:
            if pos in table.gaps:
                if debug is not None:
                    debug.lanes_overview.append(
                        LaneOverview(
                            ordinal_pos=pos,
                            gap=True,
                            state="gap",
                            resolved_day=f"{DAY_LABELS[day - 1]} (skipped)",
                        )
                    )
                day += 1
            continue

        text = lane.text()
        if text:
            out[day] = text
        if debug is not None:
            debug.lanes_overview.append(
                LaneOverview(
                    ordinal_pos=pos,
                    gap=False,
                    header=lane.header,
                    details=list(lane.details),
                    state=lane.state,
                    resolved_day=DAY_LABELS[day - 1],
                )
            )
        day += 1

    notes = []
    if past_sat:
        notes.append(f"Alignment overflow: {6 + len(past_sat)} > 6 days")
    if beyond_limit:
        notes.append(f"Alignment overflow: {len(beyond_limit)} lanes beyond probe limit {probe_limit}")
    if notes:
        log.warning("alignment_overflow", time=out[0], unmapped_lanes=len(past_sat) + len(beyond_limit))
        if debug is not None:
            debug.alignment_overflow = True
            for note in notes:
                debug.lane_events.append(
                    LaneEvent(
                        line_index=-1,
                        cell_index=-1,
                        type="detail_orphan",
                        text="",
                        note=note,
                    )
                )
