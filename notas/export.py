from __future__ import annotations
from datetime import date
from io import BytesIO
from typing import Any, Dict, List, Optional
import pandas as pd

SHEET_NAME = "Notas"

# колонка отчёта -> поле записи студента
EXPORT_COLUMNS = [
    ("Periodo", "period"),
    ("Programa", "program"),
    ("Nivel", "level"),
    ("Modalidad", "modality"),
    ("Horario", "schedule"),
    ("Profesor", "teacher"),
    ("CursoID", "course_id"),
    ("Cedula", "student_id"),
    ("Apellido", "lastname"),
    ("Nombre", "name"),
    ("Resultado", "resultado"),
    ("NotaFinal", "final_grade"),
    ("Inasistencias", "absences"),
    ("EstadoInscripcion", "enrollment_status"),
    ("TelefonoDetectado", "phone"),
    ("Archivo", "source_file"),
]


def export_file_name(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"dashboard_notas_{day.isoformat()}.xlsx"


def students_export_frame(students: List[Dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for s in students:
        rows.append({col: ("" if s.get(field) is None else s.get(field)) for col, field in EXPORT_COLUMNS})
    return pd.DataFrame(rows, columns=[c for c, _ in EXPORT_COLUMNS])


def export_students_to_excel_bytes(students: List[Dict[str, Any]]) -> bytes:
    df = students_export_frame(students)
    bio = BytesIO()

    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)

        wb = writer.book
        ws = writer.sheets[SHEET_NAME]
        fmt_header = wb.add_format({"bold": True, "bg_color": "#F2F2F2", "border": 1, "valign": "vcenter"})

        ws.freeze_panes(1, 0)
        ws.autofilter(0, 0, max(1, len(df)), len(df.columns) - 1)
        for col, name in enumerate(df.columns):
            ws.write(0, col, name, fmt_header)
            ws.set_column(col, col, max(12, min(40, len(name) + 6)))

    return bio.getvalue()
