from __future__ import annotations
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple
from .utils import norm_key, to_num, cell_text

APROBADO = "APROBADO"
APLAZADO = "APLAZADO"
OTRO = "OTRO"

# только точное совпадение нормализованного статуса
STATUS_RESULTS = {
    "passed": APROBADO,
    "failed": APLAZADO,
}

NA = "N/A"

# "JUAN PEREZ - 584121234567" -> имя + телефон (58 + 9..12 цифр)
_PHONE_RE = re.compile(r"^(.*?)[\s\-–]+(58\d{9,12})$")

# состояние разбора списка студентов
BEFORE_LIST = "before_list"
IN_LIST = "in_list"


def _cell(row: Sequence[Any], idx: int) -> Any:
    # ненайденная колонка или короткая строка -> None
    if row is None or idx < 0 or idx >= len(row):
        return None
    return row[idx]


def _text(row: Sequence[Any], idx: int) -> str:
    return cell_text(_cell(row, idx)).strip()


def split_phone_from_name(name: Any) -> Tuple[str, str]:
    # иногда телефон приклеен к имени
    s = cell_text(name).strip()
    m = _PHONE_RE.match(s)
    if not m:
        return s, ""
    return m.group(1).strip(), m.group(2).strip()


def classify_status(estado_raw: Any) -> str:
    return STATUS_RESULTS.get(norm_key(estado_raw), OTRO)


def parse_student_id(v: Any) -> Optional[str]:
    # валидный ID: число, целая часть >= 1
    n = to_num(v)
    if n is None:
        return None
    i = int(n)
    return str(i) if i >= 1 else None


def _course_fields(meta: Dict[str, str]) -> Dict[str, str]:
    return {
        "period": meta.get("period", ""),
        "program": meta.get("program", ""),
        "level": meta.get("level") or meta.get("level_raw") or NA,
        "modality": meta.get("modality", ""),
        "schedule": meta.get("schedule") or NA,
        "teacher": meta.get("teacher") or NA,
        "room": meta.get("room") or "",
        "course_id": meta.get("course_id") or "",
    }


def build_student(row: Sequence[Any], student_id: str, cols: Dict[str, int],
                  course: Dict[str, str], source_file: str) -> Dict[str, Any]:
    name, phone = split_phone_from_name(_text(row, cols.get("name", -1)))
    estado_raw = _text(row, cols.get("status", -1))

    st = {"source_file": source_file}
    st.update(course)
    st.update({
        "student_id": student_id,
        "lastname": _text(row, cols.get("lastname", -1)),
        "name": name,
        "phone": phone,
        "absences": to_num(_cell(row, cols.get("absence", -1))),
        "performance": to_num(_cell(row, cols.get("performance", -1))),
        "oral": to_num(_cell(row, cols.get("oral", -1))),
        "written": to_num(_cell(row, cols.get("written", -1))),
        "estado_raw": estado_raw,
        "resultado": classify_status(estado_raw),
        "final_grade": to_num(_cell(row, cols.get("final_grade", -1))),
        "enrollment_status": _text(row, cols.get("enrollment_status", -1)),
    })
    return st


def extract_students(
    rows: Sequence[Sequence[Any]],
    header_idx: int,
    cols: Dict[str, int],
    meta: Dict[str, str],
    source_file: str,
) -> List[Dict[str, Any]]:
    """
    Идёт по строкам после шапки.
    Пустые/без ID строки до начала списка пропускаются; первая такая строка
    после начала списка - конец данных (дальше обычно итоги/подписи).
    """
    course = _course_fields(meta)
    id_idx = cols.get("id", -1)

    out: List[Dict[str, Any]] = []
    state = BEFORE_LIST
    for row in rows[header_idx + 1:]:
        sid = parse_student_id(_cell(row, id_idx))
        if sid is None:
            if state == IN_LIST:
                break
            continue
        state = IN_LIST
        out.append(build_student(row, sid, cols, course, source_file))

    return out
