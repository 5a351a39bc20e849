"""
Summaries over parsed blocks: distinct courses with weekly meeting counts,
and same-day time overlaps.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List

from .models import ScheduleBlock

WEEKDAY_NAMES = ["", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


@dataclass
class CourseSummary:
    course_code: str
    section: str
    frequency: int  # meetings per week


@dataclass
class Conflict:
    first: ScheduleBlock
    second: ScheduleBlock
    message: str


def summarize_courses(blocks: Iterable[ScheduleBlock]) -> List[CourseSummary]:
    """One entry per (course, section), in first-seen order."""
    by_key: Dict[tuple[str, str], CourseSummary] = {}
    for b in blocks:
        key = (b.course_code, b.section)
        if key in by_key:
            by_key[key].frequency += 1
        else:
            by_key[key] = CourseSummary(course_code=b.course_code, section=b.section, frequency=1)
    return list(by_key.values())


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def overlaps(a: ScheduleBlock, b: ScheduleBlock) -> bool:
    if a.day != b.day:
        return False
    return _minutes(a.start_time) < _minutes(b.end_time) and _minutes(a.end_time) > _minutes(b.start_time)


def detect_conflicts(blocks: Iterable[ScheduleBlock]) -> List[Conflict]:
    """Every pair of blocks on the same day whose times overlap."""
    conflicts: List[Conflict] = []
    for a, b in combinations(list(blocks), 2):
        if overlaps(a, b):
            conflicts.append(
                Conflict(
                    first=a,
                    second=b,
                    message=f"{a.course_code} and {b.course_code} overlap on {WEEKDAY_NAMES[a.day]}",
                )
            )
    return conflicts
