"""
Split pasted AISIS text into time-slot groups.

Everything above the 'Time Mon Tue ...' header is ignored. Below it, each
line starting with a time range ('700-730') opens a group; following lines
(wrapped cell content) belong to it until the next time range. Footer
boilerplate from the AISIS page is counted and dropped.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from .errors import HeaderNotFoundError, NoTimeSlotsError
from .grammar import is_blank_line, is_footer_line, is_header_line, match_time_range
from .logging import get_logger
from .models import RawAnalysis

log = get_logger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass
class TimeSlotGroup:
    """Physical lines sharing one time range; the first line carries the range."""

    lines: List[str]
    line_number: int  # 1-based line of lines[0] in the pasted text
    line_numbers: List[int] = field(default_factory=list)

    @property
    def time_text(self) -> str:
        m = match_time_range(self.lines[0]) if self.lines else None
        return m.group(0).strip() if m else ""


@dataclass
class Segmentation:
    groups: List[TimeSlotGroup]
    footer_lines_ignored: int
    header_index: int


def find_header(lines: List[str]) -> int:
    """Index of the first 'Time ... Mon' line, or -1."""
    for i, line in enumerate(lines):
        if is_header_line(line):
            return i
    return -1


def segment_schedule_text(text: str, raw_analysis: RawAnalysis | None = None) -> Segmentation:
    """
    Locate the header and group the rows below it by time slot.

    :raises HeaderNotFoundError: no header line.
    :raises NoTimeSlotsError: header present but no time-range rows.
    """
    lines = _LINE_SPLIT_RE.split(text)
    if raw_analysis is not None:
        raw_analysis.total_lines = len(lines)
        raw_analysis.uses_tab_separator = any("\t" in l for l in lines)

    header_idx = find_header(lines)
    if raw_analysis is not None:
        raw_analysis.header_line = header_idx
        raw_analysis.header_content = lines[header_idx] if header_idx >= 0 else "Not found"
    if header_idx == -1:
        log.warning("header_not_found", total_lines=len(lines))
        raise HeaderNotFoundError()

    groups: List[TimeSlotGroup] = []
    current: TimeSlotGroup | None = None
    footer_lines = 0
    stray_lines = 0

    for i in range(header_idx + 1, len(lines)):
        line = lines[i]
        if is_footer_line(line):
            footer_lines += 1
            continue
        if is_blank_line(line):
            continue
        if match_time_range(line):
            if current is not None:
                groups.append(current)
            current = TimeSlotGroup(lines=[line], line_number=i + 1, line_numbers=[i + 1])
        elif current is not None:
            current.lines.append(line)
            current.line_numbers.append(i + 1)
        else:
            # Text between the header and the first time slot.
            stray_lines += 1
    if current is not None:
        groups.append(current)

    if raw_analysis is not None:
        raw_analysis.footer_lines_ignored = footer_lines
        raw_analysis.time_slot_groups = len(groups)

    log.debug(
        "schedule_segmented",
        header_line=header_idx,
        groups=len(groups),
        footer_lines=footer_lines,
        stray_lines=stray_lines,
    )

    if not groups:
        raise NoTimeSlotsError()

    return Segmentation(groups=groups, footer_lines_ignored=footer_lines, header_index=header_idx)
