import re
import math
from typing import Any, Optional

_WS_RE = re.compile(r"\s+")


def cell_text(v: Any) -> str:
    # None / NaN из pandas -> пустая строка
    if v is None:
        return ""
    if isinstance(v, float) and math.isnan(v):
        return ""
    return str(v)


def norm_key(s: Any) -> str:
    """
    Ключ для сравнения заголовков и статусов:
    - trim
    - lower
    - схлопывание пробелов
    - без точек ("Final." == "final")
    """
    s = cell_text(s).strip().lower()
    s = _WS_RE.sub(" ", s)
    return s.replace(".", "")


def to_num(v: Any) -> Optional[float]:
    # "7,5" -> 7.5, пусто/мусор/inf -> None
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        n = float(v)
        return n if math.isfinite(n) else None

    s = str(v).strip()
    if not s or "_" in s:
        return None
    try:
        n = float(s.replace(",", ".", 1))
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def clean_time(s: Any) -> str:
    # "8_30 AM" -> "8:30 AM" (в именах файлов нельзя ':')
    return cell_text(s).replace("_", ":").strip()


def round_half_up(x: float, ndigits: int = 0) -> float:
    factor = 10 ** ndigits
    return math.floor(x * factor + 0.5) / factor
