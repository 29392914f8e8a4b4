from __future__ import annotations
from typing import Any, Dict, List
import pandas as pd
from .extract import APROBADO, APLAZADO
from .scoring import OK, ALERTA, RIESGO, average_grade
from .utils import round_half_up

ALL = "All"

STUDENT_COLUMNS = [
    "source_file", "period", "program", "level", "modality", "schedule", "teacher", "room", "course_id",
    "student_id", "lastname", "name", "phone",
    "absences", "performance", "oral", "written",
    "estado_raw", "resultado", "final_grade", "enrollment_status",
]

COURSE_COLUMNS = [
    "file_name", "period", "program", "level", "modality", "schedule", "teacher", "room", "course_id",
    "total", "aprobados", "aplazados", "fail_pct", "avg", "riesgo",
]


def students_frame(students: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(students, columns=STUDENT_COLUMNS)


def courses_frame(courses: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(courses, columns=COURSE_COLUMNS)


def _options(students: List[Dict[str, Any]], field: str) -> List[str]:
    vals = sorted({str(s.get(field) or "") for s in students} - {""})
    return [ALL] + vals


def level_options(students: List[Dict[str, Any]]) -> List[str]:
    return _options(students, "level")


def teacher_options(students: List[Dict[str, Any]]) -> List[str]:
    return _options(students, "teacher")


def filter_students(
    students: List[Dict[str, Any]],
    query: str = "",
    level: str = ALL,
    teacher: str = ALL,
    result: str = ALL,
) -> List[Dict[str, Any]]:
    """
    Поиск по имени/фамилии (без учёта регистра), по ID студента и ID курса
    (подстрока), плюс точные фильтры уровня/преподавателя/результата.
    """
    q = (query or "").strip().lower()

    def match(s: Dict[str, Any]) -> bool:
        if q and not (
            q in (s.get("name") or "").lower()
            or q in (s.get("lastname") or "").lower()
            or q in (s.get("student_id") or "")
            or q in (s.get("course_id") or "")
        ):
            return False
        if level != ALL and s.get("level") != level:
            return False
        if teacher != ALL and s.get("teacher") != teacher:
            return False
        if result != ALL and s.get("resultado") != result:
            return False
        return True

    return [s for s in students if match(s)]


def compute_kpis(students: List[Dict[str, Any]], courses: List[Dict[str, Any]]) -> Dict[str, Any]:
    total = len(students)
    aprobados = sum(1 for s in students if s.get("resultado") == APROBADO)
    aplazados = sum(1 for s in students if s.get("resultado") == APLAZADO)
    return {
        "total": total,
        "aprobados": aprobados,
        "aplazados": aplazados,
        "tasa_aprob": int(round_half_up(aprobados / total * 100)) if total else 0,
        "promedio": average_grade(students),
        "cursos_riesgo": sum(1 for c in courses if c.get("riesgo") == RIESGO),
        "cursos_alerta": sum(1 for c in courses if c.get("riesgo") == ALERTA),
    }


def level_breakdown(students: List[Dict[str, Any]]) -> pd.DataFrame:
    # для графика по уровням
    cols = ["level", "aprobados", "aplazados", "total"]
    if not students:
        return pd.DataFrame(columns=cols)

    df = pd.DataFrame({
        "level": [s.get("level") or "N/A" for s in students],
        "resultado": [s.get("resultado") for s in students],
    })
    out = df.groupby("level").agg(
        aprobados=("resultado", lambda r: int((r == APROBADO).sum())),
        aplazados=("resultado", lambda r: int((r == APLAZADO).sum())),
        total=("resultado", "size"),
    ).reset_index()
    return out[cols].sort_values("level").reset_index(drop=True)


def courses_at_risk(courses: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    flagged = [c for c in courses if c.get("riesgo") != OK]
    return sorted(flagged, key=lambda c: c.get("fail_pct", 0), reverse=True)
