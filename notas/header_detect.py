from __future__ import annotations
import logging
from typing import Any, Dict, List, Sequence
from .utils import norm_key

logger = logging.getLogger(__name__)

NOT_FOUND = -1

# логическое поле -> синонимы (уже нормализованные), по приоритету
COLUMN_SYNONYMS: Dict[str, List[str]] = {
    "id": ["id"],
    "lastname": ["lastname"],
    "name": ["name"],
    # "abscence" - частая опечатка в выгрузках
    "absence": ["abscence", "absence"],
    "performance": ["performance"],
    "oral": ["oral"],
    "written": ["written"],
    "status": ["estado", "status"],
    "final_grade": ["final grade", "final"],
    "enrollment_status": ["estado de inscripción", "inscripción", "inscripcion"],
}


def is_header_row(row: Sequence[Any]) -> bool:
    # шапка: есть "id", "lastname" и что-то с "final"
    cells = [norm_key(v) for v in row]
    return "id" in cells and "lastname" in cells and any("final" in c for c in cells)


def find_header_row(rows: Sequence[Sequence[Any]]) -> int:
    for i, row in enumerate(rows):
        if is_header_row(row or []):
            return i
    return NOT_FOUND


def get_col_index(header_norm: Sequence[str], candidates: Sequence[str]) -> int:
    """
    Индекс колонки по списку синонимов.
    Сначала точное совпадение (в порядке синонимов), потом вхождение подстроки.
    """
    for c in candidates:
        for i, h in enumerate(header_norm):
            if h == c:
                return i
    for c in candidates:
        for i, h in enumerate(header_norm):
            if c in h:
                return i
    return NOT_FOUND


def resolve_columns(header_row: Sequence[Any]) -> Dict[str, int]:
    # считается один раз на файл; ненайденные поля -> NOT_FOUND
    header_norm = [norm_key(v) for v in header_row]
    cols = {field: get_col_index(header_norm, syn) for field, syn in COLUMN_SYNONYMS.items()}
    missing = [f for f, i in cols.items() if i == NOT_FOUND]
    if missing:
        logger.debug("Columns not resolved: %s", ", ".join(missing))
    return cols
