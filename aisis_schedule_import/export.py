"""
Export parsed schedule blocks to ICS, CSV, and JSON.
"""
from __future__ import annotations

import csv
import hashlib
import json
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List, Sequence

import icalendar
import pytz

from .config import get_config
from .models import ScheduleBlock

CSV_FIELDS = ["courseCode", "section", "room", "day", "startTime", "endTime"]


def _first_date_for_day(start: date, day: int) -> date:
    """First date on/after ``start`` falling on schedule day ``day`` (1 = Mon)."""
    offset = (day - 1 - start.weekday()) % 7
    return start + timedelta(days=offset)


def _as_date(value: str | date) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


def _combine(d: date, hhmm: str) -> datetime:
    return datetime.strptime(f"{d.isoformat()} {hhmm}", "%Y-%m-%d %H:%M")


def _summary(block: ScheduleBlock) -> str:
    if block.section and block.section != "N/A":
        return f"{block.course_code} {block.section}"
    return block.course_code


def export_ics(
    blocks: Sequence[ScheduleBlock],
    out_path: str | Path,
    term_start: str | date,
    term_end: str | date,
    tz_name: str | None = None,
    calendar_name: str | None = None,
) -> None:
    """Export blocks as weekly recurring events between term_start and term_end."""
    config = get_config()
    tz_name = tz_name or config.timezone
    calendar_name = calendar_name or config.calendar_name
    start_day = _as_date(term_start)
    end_day = _as_date(term_end)
    if end_day < start_day:
        raise ValueError(f"Term end {end_day} is before term start {start_day}.")

    cal = icalendar.Calendar()
    cal.add("prodid", "-//AISIS Schedule Import//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", calendar_name)
    cal.add("x-wr-timezone", tz_name)

    tz = pytz.timezone(tz_name)
    until_dt = datetime.combine(end_day, datetime.min.time()).replace(
        hour=23, minute=59, second=59, tzinfo=timezone.utc
    )

    for b in blocks:
        first_day = _first_date_for_day(start_day, b.day)
        if first_day > end_day:
            continue
        start = _combine(first_day, b.start_time)
        end = _combine(first_day, b.end_time)
        summary = _summary(b)

        event = icalendar.Event()
        uid_string = f"{summary}-{b.day}-{b.start_time}-{start_day.isoformat()}"
        uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
        event.add("uid", f"{uid_hash}@aisis-schedule-import")
        event.add("summary", summary)
        event.add("description", f"Course: {b.course_code}\nSection: {b.section}")
        if b.room and b.room != "TBD":
            event.add("location", b.room)
        event.add("dtstart", tz.localize(start))
        event.add("dtend", tz.localize(end))
        event.add("dtstamp", datetime.now(timezone.utc))
        event.add("rrule", {"freq": "weekly", "until": until_dt})
        cal.add_component(event)

    Path(out_path).write_text(cal.to_ical().decode("utf-8"), encoding="utf-8")


def _rows(blocks: Sequence[ScheduleBlock]) -> List[dict]:
    return [b.model_dump(by_alias=True) for b in blocks]


def export_csv(blocks: Sequence[ScheduleBlock], out_path: str | Path) -> None:
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction="ignore")
        w.writeheader()
        w.writerows(_rows(blocks))


def export_json(blocks: Sequence[ScheduleBlock], out_path: str | Path) -> None:
    Path(out_path).write_text(
        json.dumps(_rows(blocks), indent=2, ensure_ascii=False), encoding="utf-8"
    )


def export(
    blocks: Sequence[ScheduleBlock],
    out_path: str | Path,
    fmt: str,
    term_start: str | date | None = None,
    term_end: str | date | None = None,
) -> None:
    """Export to the given format: ics, csv, or json."""
    fmt = fmt.lower()
    if fmt == "ics":
        if not term_start or not term_end:
            raise ValueError("ICS export needs term start and end dates (YYYY-MM-DD).")
        export_ics(blocks, out_path, term_start, term_end)
    elif fmt == "csv":
        export_csv(blocks, out_path)
    elif fmt == "json":
        export_json(blocks, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use ics, csv, or json.")
