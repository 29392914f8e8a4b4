from io import BytesIO
import pytest
from openpyxl import Workbook
import xlwt

HEADER = ["ID", "Lastname", "Name", "Abscence", "Performance", "Oral", "Written", "Status", "Final Grade", "Estado de inscripción"]

FILE_NAME = "2024-2 - English - LEVEL 3 - Presencial - Teacher Ana Rojas - Room 12 - ID 4411 - 8_30 AM - 10_00 AM.xlsx"


class FakeUpload:
    """То же, что отдаёт st.file_uploader: .name и .getvalue()."""

    def __init__(self, name, data=b""):
        self.name = name
        self._data = data

    def getvalue(self):
        return self._data


def make_xlsx(rows, extra_sheets=None) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Notas"
    for r in rows:
        ws.append(list(r))
    for title, extra_rows in (extra_sheets or {}).items():
        ws2 = wb.create_sheet(title)
        for r in extra_rows:
            ws2.append(list(r))
    bio = BytesIO()
    wb.save(bio)
    return bio.getvalue()


def make_xls(rows) -> bytes:
    # настоящий BIFF .xls (читается через xlrd)
    book = xlwt.Workbook()
    ws = book.add_sheet("Notas")
    for r, row in enumerate(rows):
        for c, v in enumerate(row):
            if v is not None:
                ws.write(r, c, v)
    bio = BytesIO()
    book.save(bio)
    return bio.getvalue()


def roster_rows(statuses, grades=None, preamble=None, footer=None):
    rows = list(preamble or [["Instituto", "Reporte de notas"], []])
    rows.append(HEADER)
    for i, status in enumerate(statuses, 1):
        grade = grades[i - 1] if grades is not None else 15
        rows.append([1000 + i, f"APELLIDO{i}", f"NOMBRE{i}", 2, 18, 16, 14, status, grade, "Inscrito"])
    rows.extend(footer or [])
    return rows


@pytest.fixture
def roster_bytes():
    return make_xlsx(roster_rows(["Passed", "Failed", "Passed", "Withdrawn"], grades=[16, 8, 17.5, None]))
