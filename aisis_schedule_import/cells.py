"""
Classify one collapsed day cell and pull out course code, section and room.

A cell is only a class if its first line is a course code ('MATH 31.1')
that is not a room or facility look-alike ('SEC-A210', 'COVERED COURT 6').
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from .grammar import reject_reason, split_delivery_mode
from .models import DebugTrace

_WS_RE = re.compile(r"\s+")

DEFAULT_SECTION = "N/A"
DEFAULT_ROOM = "TBD"


@dataclass(frozen=True)
class CourseCell:
    course_code: str
    section: str
    room: str


def cell_lines(cell: str) -> list[str]:
    return [s.strip() for s in cell.split("\n") if s.strip()]


def parse_course_info(text: str) -> tuple[str, str]:
    """
    Section and room from the detail text of a cell.

    'A1 F201 (FULLY ONSITE)' → ('A1', 'F201 (FULLY ONSITE)')
    'B COVERED COURT 6'      → ('B', 'COVERED COURT 6')
    '(ONLINE)'               → ('', 'ONLINE')
    """
    before, mode = split_delivery_mode(text)
    parts = _WS_RE.sub(" ", before).strip().split(" ")
    section = parts[0]
    room_raw = " ".join(parts[1:]).strip()
    if room_raw:
        room = f"{room_raw} ({mode})" if mode else room_raw
    else:
        room = mode or DEFAULT_ROOM
    return section, room


def classify_cell(
    cell: str,
    day_name: str,
    time_range: str,
    trace: DebugTrace | None = None,
    line_number: int | None = None,
) -> CourseCell | None:
    """Return the course in ``cell`` or None for empty / rejected cells."""
    lines = cell_lines(cell or "")

    if not lines:
        if trace is not None:
            trace.record_validation(
                day_name=day_name,
                time_range=time_range,
                cell_content="",
                result="empty",
                reason="No content in cell",
                line_number=line_number,
            )
        return None

    first = lines[0]
    reason = reject_reason(first)
    if reason is not None:
        if trace is not None:
            trace.record_validation(
                day_name=day_name,
                time_range=time_range,
                cell_content=first,
                result="rejected",
                reason=reason,
                line_number=line_number,
            )
        return None

    if trace is not None:
        trace.record_validation(
            day_name=day_name,
            time_range=time_range,
            cell_content=first,
            result="accepted",
            reason="Matched course code pattern and passed reject filters",
            course_code=first,
            line_number=line_number,
        )

    if len(lines) > 1:
        section, room = parse_course_info(" ".join(lines[1:]))
    else:
        section, room = DEFAULT_SECTION, DEFAULT_ROOM
    return CourseCell(course_code=first, section=section, room=room)
