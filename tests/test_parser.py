"""End-to-end tests for parser.py – pasted AISIS text to schedule blocks."""
import pytest

from aisis_schedule_import import (
    HeaderNotFoundError,
    NoTimeSlotsError,
    ParseResult,
    parse_aisis_schedule,
)
from aisis_schedule_import.models import DebugTrace, ValidationResult
from aisis_schedule_import.parser import classify_common_issues

HEADER = "Time\tMon\tTue\tWed\tThur\tFri\tSat"


def _paste(rows: list[tuple[str, list[str]]], footer: list[str] | None = None) -> str:
    """Text as a browser copies the AISIS grid: tab-separated cells, <br> as newlines."""
    lines = ["My Class Schedule", HEADER]
    for time_text, cells in rows:
        cells = cells + [""] * (6 - len(cells))
        lines.append("\t".join([time_text] + cells))
    lines.extend(footer or [])
    return "\n".join(lines)


def test_two_touching_slots_give_one_block():
    text = "Time\tMon\tTue\tWed\tThur\tFri\tSat\n700-730\tMATH 10\n\tA1 F201\n730-800\tMATH 10\n\tA1 F201\n"
    blocks = parse_aisis_schedule(text)
    assert [b.model_dump(by_alias=True) for b in blocks] == [
        {
            "courseCode": "MATH 10",
            "section": "A1",
            "room": "F201",
            "day": 1,
            "startTime": "07:00",
            "endTime": "08:00",
        }
    ]


def test_missing_header():
    with pytest.raises(HeaderNotFoundError, match="header"):
        parse_aisis_schedule("700-730\tMATH 10\n\tA1 F201")


def test_missing_time_slots():
    with pytest.raises(NoTimeSlotsError):
        parse_aisis_schedule(HEADER + "\nPrivacy Policy\n")


def test_gap_fidelity_single_line_row():
    text = HEADER + "\n0700-0730\tMATH 10 A1 F201\t\tCS 21 B2 V201"
    blocks = parse_aisis_schedule(text)
    assert [(b.day, b.course_code, b.section, b.room) for b in blocks] == [
        (1, "MATH 10", "A1", "F201"),
        (3, "CS 21", "B2", "V201"),
    ]
    assert all((b.start_time, b.end_time) == ("07:00", "07:30") for b in blocks)


def test_gap_fidelity_wrapped_row():
    text = _paste([("0700-0730", ["MATH 10\nA1 F201", "", "CS 21\nB2 V201"])])
    blocks = parse_aisis_schedule(text)
    assert [(b.day, b.course_code) for b in blocks] == [(1, "MATH 10"), (3, "CS 21")]


def test_same_course_two_days():
    text = _paste([("700-730", ["MATH 10\nA1 F201", "", "MATH 10\nA1 F201"])])
    blocks = parse_aisis_schedule(text)
    assert [b.day for b in blocks] == [1, 3]
    assert all(b.course_code == "MATH 10" for b in blocks)


def test_full_week_with_footer():
    math = "MATH 31.1\nA1 SEC-A210 (FULLY ONSITE)"
    cs = "CS 21\nB2 F-113"
    text = _paste(
        [
            ("0800-0830", [math, cs]),
            ("0830-0900", [math, cs]),
            ("0900-0930", ["", cs]),
        ],
        footer=["", "Home : Sign Out", "Privacy Policy", "Copyright 2024 Ateneo de Manila University"],
    )
    result = parse_aisis_schedule(text, with_debug=True)
    assert isinstance(result, ParseResult)
    assert [b.model_dump() for b in result.blocks] == [
        {
            "course_code": "MATH 31.1",
            "section": "A1",
            "room": "SEC-A210 (FULLY ONSITE)",
            "day": 1,
            "start_time": "08:00",
            "end_time": "09:00",
        },
        {
            "course_code": "CS 21",
            "section": "B2",
            "room": "F-113",
            "day": 2,
            "start_time": "08:00",
            "end_time": "09:30",
        },
    ]

    debug = result.debug
    assert debug.raw_analysis.footer_lines_ignored == 3
    assert debug.raw_analysis.time_slot_groups == 3
    assert debug.raw_analysis.header_line == 1
    for extraction in debug.column_extractions:
        assert not any("Privacy" in line for line in extraction.raw_lines)
    footer_issues = [i for i in debug.common_issues if i.type == "footer"]
    assert footer_issues[0].severity == "info"
    assert footer_issues[0].message.startswith("3 footer lines")


def test_debug_trace_contents():
    text = _paste([("700-730", ["MATH 10\nA1 F201"])])
    result = parse_aisis_schedule(text, with_debug=True)
    extraction = result.debug.column_extractions[0]
    assert extraction.time_slot == "700-730"
    assert extraction.line_number == 3
    assert extraction.collapsed_columns[1] == "MATH 10\nA1 F201"
    assert extraction.cells_with_content == [0, 1]
    assert [o.resolved_day for o in extraction.lanes_overview][0] == "Mon"
    assert {e.type for e in extraction.lane_events} >= {"header", "detail"}

    results = [v.result for v in result.debug.validation_results]
    assert results == ["accepted", "empty", "empty", "empty", "empty", "empty"]


def test_debug_trace_serializes_with_camel_case():
    text = _paste([("700-730", ["MATH 10\nA1 F201"])])
    dumped = parse_aisis_schedule(text, with_debug=True).debug.model_dump(by_alias=True)
    assert set(dumped) == {"rawAnalysis", "columnExtractions", "validationResults", "commonIssues"}
    assert "laneEvents" in dumped["columnExtractions"][0]
    assert dumped["rawAnalysis"]["usesTabSeparator"] is True


def test_overflow_is_reported_not_raised():
    line = "700-730\t" + "\t".join(f"MATH {n}" for n in range(1, 8))
    result = parse_aisis_schedule(HEADER + "\n" + line, with_debug=True)
    assert len(result.blocks) == 6
    assert any("alignment overflow" in i.message for i in result.debug.common_issues)


def test_orphan_detail_reported():
    text = HEADER + "\n700-730\tA1 F201"
    result = parse_aisis_schedule(text, with_debug=True)
    assert result.blocks == []
    assert any(i.type == "alignment" and i.severity == "info" for i in result.debug.common_issues)


def test_backwards_time_slot_does_not_raise():
    result = parse_aisis_schedule(HEADER + "\n1200-100\tMATH 10\n\tA1 F201", with_debug=True)
    assert result.blocks == []
    assert any(i.type == "format" for i in result.debug.common_issues)
    assert not any(i.type == "regex" for i in result.debug.common_issues)
    assert not any(v.result == "accepted" for v in result.debug.validation_results)


def test_room_codes_issue():
    trace = DebugTrace()
    for content in ["SEC-A210", "BEL-307", "random text"]:
        trace.validation_results.append(
            ValidationResult(
                day_name="Mon",
                time_range="07:00-07:30",
                cell_content=content,
                result="rejected",
                reason="Does not match course code pattern",
            )
        )
    classify_common_issues(trace)
    messages = [i.message for i in trace.common_issues]
    assert messages[0] == "2 cells rejected as room codes (e.g., SEC-A210)"
    assert trace.common_issues[0].severity == "warning"
    assert messages[1].startswith("1 cells did not start with a course code")


def test_library_call_writes_nothing_to_stdout(capsys):
    blocks = parse_aisis_schedule(HEADER + "\n700-730\tMATH 10\n\tA1 F201")
    assert len(blocks) == 1
    assert capsys.readouterr().out == ""
