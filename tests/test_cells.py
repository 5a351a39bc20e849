"""Tests for cells.py – cell classification and section/room extraction."""
from aisis_schedule_import.cells import CourseCell, classify_cell, parse_course_info
from aisis_schedule_import.grammar import NO_GRAMMAR_MATCH
from aisis_schedule_import.models import DebugTrace


class TestParseCourseInfo:
    def test_section_and_room(self):
        assert parse_course_info("A1 F201") == ("A1", "F201")

    def test_mode_appended_to_room(self):
        assert parse_course_info("A1 SEC-A210 (FULLY ONSITE)") == ("A1", "SEC-A210 (FULLY ONSITE)")

    def test_mode_only(self):
        assert parse_course_info("(FULLY ONLINE)") == ("", "FULLY ONLINE")

    def test_section_only(self):
        assert parse_course_info("A1") == ("A1", "TBD")
        assert parse_course_info("A1 (ONLINE)") == ("A1", "ONLINE")

    def test_wrapped_room_flattened(self):
        assert parse_course_info("B COVERED   COURT 6") == ("B", "COVERED COURT 6")


class TestClassifyCell:
    def test_course_with_details(self):
        assert classify_cell("MATH 10\nA1 F201", "Mon", "07:00-07:30") == CourseCell("MATH 10", "A1", "F201")

    def test_course_without_details(self):
        assert classify_cell("MATH 31.1", "Mon", "07:00-07:30") == CourseCell("MATH 31.1", "N/A", "TBD")

    def test_wrapped_detail_lines_joined(self):
        cell = "PE 1\nB COVERED\nCOURT 6"
        assert classify_cell(cell, "Sat", "08:00-08:30") == CourseCell("PE 1", "B", "COVERED COURT 6")

    def test_empty(self):
        trace = DebugTrace()
        assert classify_cell("", "Tue", "07:00-07:30", trace) is None
        assert classify_cell(" \n ", "Tue", "07:00-07:30", trace) is None
        assert [v.result for v in trace.validation_results] == ["empty", "empty"]

    def test_room_code_rejected(self):
        trace = DebugTrace()
        assert classify_cell("SEC-A210\nA1", "Wed", "07:00-07:30", trace) is None
        v = trace.validation_results[0]
        assert v.result == "rejected"
        assert v.reason == NO_GRAMMAR_MATCH
        assert v.cell_content == "SEC-A210"
        assert v.day_name == "Wed"
        assert v.time_range == "07:00-07:30"

    def test_facility_rejected_with_pattern(self):
        trace = DebugTrace()
        assert classify_cell("COVERED COURT 6", "Fri", "07:00-07:30", trace) is None
        assert "COVERED" in trace.validation_results[0].reason

    def test_accepted_recorded(self):
        trace = DebugTrace()
        classify_cell("CS 101A\nB2 V201", "Thur", "09:00-09:30", trace, line_number=12)
        v = trace.validation_results[0]
        assert v.result == "accepted"
        assert v.course_code == "CS 101A"
        assert v.line_number == 12
