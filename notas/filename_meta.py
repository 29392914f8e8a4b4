from __future__ import annotations
import re
from typing import Dict, List, Optional
from .utils import clean_time

EXT_RE = re.compile(r"\.(xlsx|xls)$", re.I)
SEPARATOR = " - "

LEVEL_RE = re.compile(r"level", re.I)
LEVEL_NUM_RE = re.compile(r"(\d{1,2})")
TIME_RE = re.compile(r"\d+_\d+\s*(am|pm)", re.I)

# префикс сегмента -> поле
PREFIX_FIELDS = {
    "teacher": re.compile(r"^teacher\s*", re.I),
    "room": re.compile(r"^room\s*", re.I),
    "course_id": re.compile(r"^id\s*", re.I),
}


def _part(parts: List[str], i: int) -> str:
    return parts[i] if i < len(parts) else ""


def _first(parts: List[str], pattern: re.Pattern) -> Optional[str]:
    for p in parts:
        if pattern.search(p):
            return p
    return None


def canonical_level(level_raw: str) -> str:
    # "LEVEL 2" -> "L02"
    m = LEVEL_NUM_RE.search(level_raw or "")
    return f"L{int(m.group(1)):02d}" if m else ""


def parse_course_meta_from_filename(filename: str) -> Dict[str, str]:
    """
    Разбирает имя файла секции курса, например:
      "2024-2 - English - LEVEL 3 - Presencial - Teacher Ana - Room 12 - ID 4411 - 8_30 AM - 10_00 AM.xlsx"

    Сегменты разделены " - ". period/program/modality берутся по позиции,
    level/teacher/room/id ищутся по шаблону, horario - по двум сегментам
    вида "8_30 AM". Отсутствующий сегмент даёт пустое поле, исключений нет.
    """
    base = EXT_RE.sub("", filename or "")
    parts = [p.strip() for p in base.split(SEPARATOR)]

    meta = {
        "period": _part(parts, 0),
        "program": _part(parts, 1),
        "level_raw": _first(parts, LEVEL_RE) or "",
        "level": "",
        "modality": _part(parts, 3),
        "start": "",
        "end": "",
        "schedule": "",
        "teacher": "",
        "room": "",
        "course_id": "",
        "file_base": base,
        "file_name": filename,
    }
    meta["level"] = canonical_level(meta["level_raw"])

    for field, prefix_re in PREFIX_FIELDS.items():
        hit = _first(parts, prefix_re)
        if hit is not None:
            meta[field] = prefix_re.sub("", hit, count=1).strip()

    times = [p for p in parts if TIME_RE.search(p)]
    if len(times) >= 2:
        meta["start"] = clean_time(times[0])
        meta["end"] = clean_time(times[1])
        meta["schedule"] = f"{meta['start']} - {meta['end']}"

    return meta
