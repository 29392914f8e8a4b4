"""
Этот пакет содержит:
- разбор имени файла секции курса (период/программа/уровень/преподаватель/...)
- поиск шапки и сопоставление колонок по синонимам
- извлечение записей студентов из листа Excel
- агрегаты по курсу (процент APLAZADO, средняя оценка, риск)
- пакетную обработку загруженных файлов
- представления для дашборда и экспорт в Excel
"""
from .utils import norm_key, to_num, clean_time
from .filename_meta import parse_course_meta_from_filename
from .header_detect import find_header_row, get_col_index, resolve_columns
from .extract import extract_students, split_phone_from_name, classify_status
from .scoring import compute_course_aggregate, classify_risk
from .ingest import read_first_sheet, load_uploads_from_paths
from .pipeline import parse_notas_files, process_file
from .export import export_students_to_excel_bytes

__all__ = [
    "norm_key",
    "to_num",
    "clean_time",
    "parse_course_meta_from_filename",
    "find_header_row",
    "get_col_index",
    "resolve_columns",
    "extract_students",
    "split_phone_from_name",
    "classify_status",
    "compute_course_aggregate",
    "classify_risk",
    "read_first_sheet",
    "load_uploads_from_paths",
    "parse_notas_files",
    "process_file",
    "export_students_to_excel_bytes",
]
