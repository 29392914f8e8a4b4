from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple
from .filename_meta import parse_course_meta_from_filename
from .header_detect import NOT_FOUND, find_header_row, resolve_columns
from .extract import extract_students
from .scoring import compute_course_aggregate
from .ingest import read_first_sheet, is_blank_sheet, is_spreadsheet_name

logger = logging.getLogger(__name__)

FileResult = Tuple[Optional[Dict[str, Any]], List[Dict[str, Any]], List[str]]


def _skip(name: str, message: str) -> FileResult:
    logger.warning("Skipping %s: %s", name, message)
    return None, [], [message]


def process_file(name: str, data: bytes) -> FileResult:
    """
    Один файл -> (агрегат курса или None, студенты, предупреждения).
    Ошибки файла не выбрасываются, а становятся предупреждением.
    """
    meta = parse_course_meta_from_filename(name)

    try:
        rows = read_first_sheet(data)
    except Exception as e:
        logger.debug("Decode error in %s: %r", name, e)
        return _skip(name, f'No pude leer "{name}" como Excel.')

    if rows is None:
        return _skip(name, f'"{name}" no tiene hojas.')
    if is_blank_sheet(rows):
        return _skip(name, f'"{name}" tiene la primera hoja vacía.')

    header_idx = find_header_row(rows)
    if header_idx == NOT_FOUND:
        return _skip(
            name,
            f'No encontré encabezados en "{name}". (Debe tener columnas como ID / Lastname / Final Grade).',
        )
    logger.debug("Header row for %s: %d", name, header_idx)

    cols = resolve_columns(rows[header_idx])
    students = extract_students(rows, header_idx, cols, meta, source_file=name)
    course = compute_course_aggregate(meta, students)

    logger.info("Parsed %s: %d students, fail %d%% (%s)", name, course["total"], course["fail_pct"], course["riesgo"])
    return course, students, []


class BatchResult:
    """Накопитель результата: файлы, курсы, студенты, предупреждения (по порядку)."""

    def __init__(self):
        self.files_count = 0
        self.courses: List[Dict[str, Any]] = []
        self.students: List[Dict[str, Any]] = []
        self.warnings: List[str] = []

    def add(self, result: FileResult) -> None:
        course, students, warnings = result
        self.files_count += 1
        if course is not None:
            self.courses.append(course)
        self.students.extend(students)
        self.warnings.extend(warnings)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "files_count": self.files_count,
            "courses": list(self.courses),
            "students": list(self.students),
            "warnings": list(self.warnings),
        }


def parse_notas_files(uploads: Iterable[Any]) -> Dict[str, Any]:
    """
    uploads: объекты с .name и .getvalue() (Streamlit UploadedFile, LocalUpload).
    Файлы не .xlsx/.xls молча отбрасываются; остальные обрабатываются по очереди.
    """
    files = [f for f in (uploads or []) if is_spreadsheet_name(f.name)]
    batch = BatchResult()

    for i, f in enumerate(files, 1):
        logger.info("[%d/%d] %s", i, len(files), f.name)
        batch.add(process_file(f.name, f.getvalue()))

    logger.info(
        "Batch done: %d files, %d courses, %d students, %d warnings",
        batch.files_count, len(batch.courses), len(batch.students), len(batch.warnings),
    )
    return batch.as_dict()
