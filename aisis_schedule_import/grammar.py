"""
Line and cell grammar for text copied from the AISIS class schedule page.

Pasted rows look like::

    Time	Mon	Tue	Wed	Thur	Fri	Sat
    700-730	MATH 10
    A1 F201 (FULLY ONSITE)	CS 21
    B2 SEC-A210

A cell whose first line matches the course-code grammar starts a class; the
lines after it carry section, room and delivery mode.
"""
from __future__ import annotations

import re

# ──────────────────────────────────────────────────────────────────
#  Patterns
# ──────────────────────────────────────────────────────────────────

# "700-730", "0800-0930"
TIME_RX = re.compile(r"^\s*(\d{3,4})-(\d{3,4})")

# "MATH 10", "SocSc 11", "MATH 31.1", "CS 101A", "THEO 11"
COURSE_CODE_RX = re.compile(
    r"^[A-Z][A-Za-z]*(?:\s+[A-Z][A-Za-z]*)*\s+\d+(?:\.\d+)?[A-Za-z]?$"
)

# Course code at the start of a flattened one-line cell: "MATH 10 A1 F201"
_COURSE_CODE_PREFIX_RX = re.compile(
    r"^([A-Z][A-Za-z]*(?:\s+[A-Z][A-Za-z]*)*\s+\d+(?:\.\d+)?[A-Za-z]?)\s+(\S.*)$"
)

# Only applied after COURSE_CODE_RX matched, to drop look-alikes.
REJECT_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^[A-Z]?\d+$"), "room label (A3, 307)"),
    (re.compile(r"^[A-Z]-\d+$"), "building-room code (F-113)"),
    (re.compile(r"^[A-Z]{2,3}-[A-Z]?\d+$"), "building-room code (SEC-A210)"),
    (re.compile(r"^COVERED\s+COURT", re.I), "facility name (COVERED COURT)"),
    (re.compile(r"^\([^)]+\)$"), "delivery mode annotation"),
    (re.compile(r"^[A-Z]$"), "single letter"),
]

# Hyphenated room codes that commonly get mistaken for course codes.
ROOM_CODE_RX = re.compile(r"^[A-Z]{2,3}-[A-Z]?\d+$")

FOOTER_PATTERNS = [
    re.compile(r"Home\s*:", re.I),
    re.compile(r"Privacy Policy", re.I),
    re.compile(r"Terms & Conditions", re.I),
    re.compile(r"Ateneo Integrated Student Information System", re.I),
    re.compile(r"Contact Us", re.I),
    re.compile(r"Copyright.*Ateneo", re.I),
]

_HEADER_TIME_RX = re.compile(r"Time", re.I)
_HEADER_MON_RX = re.compile(r"\bMon\b", re.I)

_MODE_RX = re.compile(r"\(([^)]+)\)\s*$")

DAY_LABELS = ["Mon", "Tue", "Wed", "Thur", "Fri", "Sat"]

NO_GRAMMAR_MATCH = "Does not match course code pattern"


# ──────────────────────────────────────────────────────────────────
#  Helpers
# ──────────────────────────────────────────────────────────────────

def is_header_line(line: str) -> bool:
    return bool(_HEADER_TIME_RX.search(line) and _HEADER_MON_RX.search(line))


def is_footer_line(line: str) -> bool:
    return any(p.search(line) for p in FOOTER_PATTERNS)


def is_blank_line(line: str) -> bool:
    return not line.strip()


def match_time_range(text: str) -> re.Match | None:
    return TIME_RX.match(text)


def to_hh_mm(digits: str) -> str:
    """'700' → '07:00', '1330' → '13:30'."""
    p = digits.zfill(4)
    return f"{p[:2]}:{p[2:]}"


def clean_cell(text: str) -> str:
    """Normalize a pasted cell: NBSP to space, drop zero-width spaces, trim."""
    return text.replace("\u00a0", " ").replace("\u200b", "").strip()


def reject_reason(line: str) -> str | None:
    """Why ``line`` is not a course code, or None when it is one."""
    if not COURSE_CODE_RX.match(line):
        return NO_GRAMMAR_MATCH
    for rx, label in REJECT_PATTERNS:
        if rx.search(line):
            return f"Matched reject pattern: {rx.pattern} ({label})"
    return None


def is_valid_course_code(line: str) -> bool:
    return reject_reason(line) is None


def split_inline_course(text: str) -> tuple[str, str] | None:
    """
    Split a one-line cell like 'MATH 10 A1 F201' into
    ('MATH 10', 'A1 F201'). Returns None if the cell does not start with a
    valid course code or already is one.
    """
    if is_valid_course_code(text):
        return None
    m = _COURSE_CODE_PREFIX_RX.match(text)
    if not m:
        return None
    code, rest = m.group(1), m.group(2).strip()
    if not rest or not is_valid_course_code(code):
        return None
    return code, rest


def split_delivery_mode(text: str) -> tuple[str, str]:
    """'A1 F201 (FULLY ONSITE)' → ('A1 F201', 'FULLY ONSITE')."""
    m = _MODE_RX.search(text)
    mode = m.group(1) if m else ""
    before = _MODE_RX.sub("", text).strip() if m else text.strip()
    return before, mode
