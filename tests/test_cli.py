import json

from aisis_schedule_import.cli import main

PASTE = "Time\tMon\tTue\tWed\tThur\tFri\tSat\n700-730\tMATH 10\n\tA1 F201\n730-800\tMATH 10\n\tA1 F201\n"


def test_export_json(tmp_path):
    src = tmp_path / "schedule.txt"
    src.write_text(PASTE, encoding="utf-8")
    out = tmp_path / "blocks"
    debug = tmp_path / "trace.json"

    assert main([str(src), "-o", str(out), "-f", "json", "--debug", str(debug)]) == 0

    data = json.loads((tmp_path / "blocks.json").read_text(encoding="utf-8"))
    assert data == [
        {"courseCode": "MATH 10", "section": "A1", "room": "F201", "day": 1, "startTime": "07:00", "endTime": "08:00"}
    ]
    trace = json.loads(debug.read_text(encoding="utf-8"))
    assert trace["rawAnalysis"]["timeSlotGroups"] == 2


def test_list_courses(tmp_path, capsys):
    src = tmp_path / "schedule.txt"
    src.write_text(PASTE, encoding="utf-8")
    assert main([str(src), "--list-courses"]) == 0
    out = capsys.readouterr().out
    assert "MATH 10" in out
    assert "| 1" in out


def test_print_blocks(tmp_path, capsys):
    src = tmp_path / "schedule.txt"
    src.write_text(PASTE, encoding="utf-8")
    assert main([str(src)]) == 0
    out = capsys.readouterr().out
    assert "Mon  | 07:00-08:00 | MATH 10" in out


def test_missing_header_exit_code(tmp_path, capsys):
    src = tmp_path / "schedule.txt"
    src.write_text("nothing useful", encoding="utf-8")
    assert main([str(src)]) == 1
    assert "Couldn't find schedule header" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert "not found" in capsys.readouterr().err


def test_ics_needs_term_dates(tmp_path, capsys):
    src = tmp_path / "schedule.txt"
    src.write_text(PASTE, encoding="utf-8")
    assert main([str(src), "-o", str(tmp_path / "cal"), "-f", "ics"]) == 1
    assert "term start and end" in capsys.readouterr().err
