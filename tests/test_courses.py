from aisis_schedule_import.courses import detect_conflicts, overlaps, summarize_courses
from aisis_schedule_import.models import ScheduleBlock


def _b(code, day, start, end, section="A1"):
    return ScheduleBlock(course_code=code, section=section, room="F201", day=day, start_time=start, end_time=end)


def test_summarize_courses():
    blocks = [
        _b("MATH 10", 1, "07:00", "08:00"),
        _b("CS 21", 2, "09:00", "10:00"),
        _b("MATH 10", 3, "07:00", "08:00"),
        _b("MATH 10", 5, "07:00", "08:00", section="B1"),
    ]
    summary = summarize_courses(blocks)
    assert [(c.course_code, c.section, c.frequency) for c in summary] == [
        ("MATH 10", "A1", 2),
        ("CS 21", "A1", 1),
        ("MATH 10", "B1", 1),
    ]


def test_overlaps():
    assert overlaps(_b("A 1", 1, "07:00", "08:00"), _b("B 1", 1, "07:30", "09:00"))
    # touching is not overlapping
    assert not overlaps(_b("A 1", 1, "07:00", "08:00"), _b("B 1", 1, "08:00", "09:00"))
    assert not overlaps(_b("A 1", 1, "07:00", "08:00"), _b("B 1", 2, "07:00", "08:00"))


def test_detect_conflicts():
    blocks = [
        _b("MATH 10", 1, "07:00", "08:00"),
        _b("CS 21", 1, "07:30", "09:00"),
        _b("PE 1", 2, "07:00", "08:00"),
    ]
    conflicts = detect_conflicts(blocks)
    assert len(conflicts) == 1
    assert conflicts[0].message == "MATH 10 and CS 21 overlap on Monday"
    assert conflicts[0].first.course_code == "MATH 10"
