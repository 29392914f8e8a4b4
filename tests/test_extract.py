import pytest
from notas.extract import (extract_students, split_phone_from_name, classify_status, parse_student_id,
                           APROBADO, APLAZADO, OTRO)
from notas.filename_meta import parse_course_meta_from_filename
from notas.header_detect import resolve_columns
from conftest import HEADER, FILE_NAME


def _extract(rows, meta=None, source="curso.xlsx"):
    header_idx = rows.index(HEADER)
    cols = resolve_columns(HEADER)
    return extract_students(rows, header_idx, cols, meta or parse_course_meta_from_filename(source), source)


def _row(sid, status="Passed", grade=15, name="JUAN"):
    return [sid, "PEREZ", name, 1, 18, 16, 14, status, grade, "Inscrito"]


def test_phone_split():
    assert split_phone_from_name("JUAN PEREZ - 584121234567") == ("JUAN PEREZ", "584121234567")
    assert split_phone_from_name("JUAN PEREZ 58412123456") == ("JUAN PEREZ", "58412123456")
    assert split_phone_from_name("ANA – 58412123456789") == ("ANA", "58412123456789")


@pytest.mark.parametrize("name", ["JUAN PEREZ", "JUAN PEREZ - 04121234567", "JUAN - 5841", "JUAN - 584121234567890"])
def test_phone_not_split(name):
    assert split_phone_from_name(name) == (name, "")


def test_classify_status():
    assert classify_status("Passed") == APROBADO
    assert classify_status("  PASSED ") == APROBADO
    assert classify_status("FAILED") == APLAZADO
    assert classify_status("") == OTRO
    assert classify_status(None) == OTRO
    assert classify_status("Withdrawn") == OTRO
    assert classify_status("Passed with honors") == OTRO


def test_parse_student_id():
    assert parse_student_id(12345) == "12345"
    assert parse_student_id(12345.9) == "12345"
    assert parse_student_id("27,0") == "27"
    assert parse_student_id(0) is None
    assert parse_student_id(-4) is None
    assert parse_student_id(0.5) is None
    assert parse_student_id("") is None
    assert parse_student_id("Total") is None


def test_roster_stops_at_first_blank_after_start():
    rows = [HEADER] + [_row(100 + i) for i in range(8)] + [[None] * 10, ["", "Total", "", "", "", "", "", "", 120]]
    students = _extract(rows)
    assert len(students) == 8
    assert [s["student_id"] for s in students] == [str(100 + i) for i in range(8)]


def test_blank_rows_before_list_are_skipped():
    rows = [HEADER, [None] * 10, ["", "Seccion A"], _row(1), _row(2), [], _row(3)]
    students = _extract(rows)
    assert [s["student_id"] for s in students] == ["1", "2"]


def test_student_record_fields():
    meta = parse_course_meta_from_filename(FILE_NAME)
    rows = [HEADER, [12.0, " Perez ", "JUAN - 584121234567", "3", "17,5", None, "x", "Failed", "9,5", " Retirado "]]
    (st,) = _extract(rows, meta=meta, source=FILE_NAME)
    assert st["source_file"] == FILE_NAME
    assert st["period"] == "2024-2"
    assert st["program"] == "English"
    assert st["level"] == "L03"
    assert st["modality"] == "Presencial"
    assert st["schedule"] == "8:30 AM - 10:00 AM"
    assert st["teacher"] == "Ana Rojas"
    assert st["room"] == "12"
    assert st["course_id"] == "4411"
    assert st["student_id"] == "12"
    assert st["lastname"] == "Perez"
    assert st["name"] == "JUAN"
    assert st["phone"] == "584121234567"
    assert st["absences"] == 3.0
    assert st["performance"] == 17.5
    assert st["oral"] is None
    assert st["written"] is None
    assert st["estado_raw"] == "Failed"
    assert st["resultado"] == APLAZADO
    assert st["final_grade"] == 9.5
    assert st["enrollment_status"] == "Retirado"


def test_metadata_fallbacks():
    (st,) = _extract([HEADER, _row(5)], source="notas.xlsx")
    assert st["level"] == "N/A"
    assert st["schedule"] == "N/A"
    assert st["teacher"] == "N/A"
    assert st["room"] == ""
    assert st["course_id"] == ""


def test_level_falls_back_to_raw():
    (st,) = _extract([HEADER, _row(5)], source="P - Prog - Level Basic - Mod.xlsx")
    assert st["level"] == "Level Basic"


def test_unresolved_columns_are_absent():
    header = ["ID", "Lastname", "Final"]
    rows = [header, [7, "PEREZ", 14, "sobra"]]
    cols = resolve_columns(header)
    (st,) = extract_students(rows, 0, cols, parse_course_meta_from_filename("c.xlsx"), "c.xlsx")
    assert st["phone"] == ""
    assert st["absences"] is None
    assert st["estado_raw"] == ""
    assert st["resultado"] == OTRO
    assert st["final_grade"] == 14.0
    assert st["enrollment_status"] == ""


def test_short_rows_do_not_fail():
    (st,) = _extract([HEADER, [3, "PEREZ"]])
    assert st["name"] == ""
    assert st["final_grade"] is None
