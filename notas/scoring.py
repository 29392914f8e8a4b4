from __future__ import annotations
from typing import Any, Dict, List, Optional
import numpy as np
from .extract import APROBADO, APLAZADO
from .utils import round_half_up

OK = "OK"
ALERTA = "ALERTA"
RIESGO = "RIESGO"

# пороги по доле APLAZADO, %
RISK_THRESHOLD = 35
ALERT_THRESHOLD = 20


def classify_risk(fail_pct: int) -> str:
    if fail_pct >= RISK_THRESHOLD:
        return RIESGO
    if fail_pct >= ALERT_THRESHOLD:
        return ALERTA
    return OK


def average_grade(students: List[Dict[str, Any]]) -> Optional[float]:
    # None-оценки не учитываются; нет оценок -> None (не 0)
    grades = [s["final_grade"] for s in students if s.get("final_grade") is not None]
    if not grades:
        return None
    return round_half_up(float(np.mean(grades)), 1)


def compute_course_aggregate(meta: Dict[str, str], students: List[Dict[str, Any]]) -> Dict[str, Any]:
    total = len(students)
    aprobados = sum(1 for s in students if s.get("resultado") == APROBADO)
    aplazados = sum(1 for s in students if s.get("resultado") == APLAZADO)
    fail_pct = int(round_half_up(aplazados / total * 100)) if total else 0

    course = dict(meta)
    course.update({
        "total": total,
        "aprobados": aprobados,
        "aplazados": aplazados,
        "fail_pct": fail_pct,
        "avg": average_grade(students),
        "riesgo": classify_risk(fail_pct),
    })
    return course
