from __future__ import annotations
from io import BytesIO
from pathlib import Path
from typing import Any, Iterable, List, Optional
import pandas as pd
from .utils import cell_text

EXCEL_EXTENSIONS = (".xlsx", ".xls")
# =========================

# Excel: первый лист как "матрица" (без header, merged cells не разворачиваем)
# =========================
def _sheet_to_matrix(wb, sheet_name: str) -> List[List[Any]]:
    # wb - книга openpyxl, уже открытая pandas (read_only), второй раз не парсим
    ws = wb[sheet_name]
    if getattr(wb, "read_only", False):
        # размеры из файла бывают неверными (как делает сам pandas)
        ws.reset_dimensions()
    rows = [list(r) for r in ws.iter_rows(values_only=True)]
    width = max((len(r) for r in rows), default=0)
    return [r + [None] * (width - len(r)) for r in rows]


def _frame_to_matrix(df: pd.DataFrame) -> List[List[Any]]:
    # NaN -> None, как у openpyxl
    df = df.astype(object).where(df.notna(), None)
    return df.values.tolist()


def read_first_sheet(data: bytes) -> Optional[List[List[Any]]]:
    """
    Возвращает строки первого листа (каждая строка - список ячеек) или None,
    если листов нет. Остальные листы игнорируются.
    Нечитаемый файл -> исключение pandas/openpyxl/xlrd (его ловит pipeline).
    """
    xls = pd.ExcelFile(BytesIO(data))
    try:
        if not xls.sheet_names:
            return None
        sheet = xls.sheet_names[0]

        if xls.engine == "openpyxl":
            return _sheet_to_matrix(xls.book, sheet)

        # .xls (xlrd) и прочее, что умеет pandas
        df_raw = pd.read_excel(xls, sheet_name=sheet, header=None, dtype=object)
        return _frame_to_matrix(df_raw)
    finally:
        xls.close()


def is_blank_sheet(rows: Optional[List[List[Any]]]) -> bool:
    if not rows:
        return True
    return all(cell_text(v).strip() == "" for row in rows for v in (row or []))


def is_spreadsheet_name(name: str) -> bool:
    return str(name or "").lower().endswith(EXCEL_EXTENSIONS)
# =========================

# Локальные файлы -> тот же интерфейс, что у загрузок Streamlit (.name / .getvalue())
# =========================
class LocalUpload:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.name

    def getvalue(self) -> bytes:
        return self.path.read_bytes()

    def __repr__(self) -> str:
        return f"LocalUpload({str(self.path)!r})"


def load_uploads_from_paths(paths: Iterable[Any]) -> List[LocalUpload]:
    # каталог -> все файлы внутри (рекурсивно), по имени
    out: List[LocalUpload] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            out.extend(LocalUpload(f) for f in sorted(p.rglob("*")) if f.is_file())
        else:
            out.append(LocalUpload(p))
    return out
