# creative_touch/reporting/validators.py
from __future__ import annotations

import math
from datetime import date
from typing import Any, Optional

from .config import AppConfig
from .dto import ReportQuery
from .exceptions import BadDateRange, InvalidParam
from .schema import PAYMENT_METHODS


# —— Query ——

def validate_date_range(date_from: Optional[date], date_to: Optional[date]) -> None:
    if date_from and date_to and date_from > date_to:
        raise BadDateRange("date_from no puede ser mayor que date_to.")


def validate_period(q: ReportQuery) -> None:
    if q.period == "custom" and (q.date_from is None or q.date_to is None):
        raise InvalidParam("date_from y date_to son requeridos cuando period='custom'.")


def resolve_top_k(q: ReportQuery, cfg: AppConfig) -> Optional[int]:
    """None => sin recorte; entero => clamp entre min y max."""
    if q.top_k is None:
        return None
    try:
        v = int(q.top_k)
    except (TypeError, ValueError) as exc:
        raise InvalidParam("top_k debe ser entero.") from exc
    return max(cfg.top_k_min, min(v, cfg.top_k_max))


def validate_query(q: ReportQuery) -> None:
    """Valida aspectos semánticos de la query."""
    validate_period(q)
    validate_date_range(q.date_from, q.date_to)


# —— Alta de registros ——

def validate_amount(amount: Any) -> float:
    """Monto finito y estrictamente positivo."""
    try:
        v = float(amount)
    except (TypeError, ValueError) as exc:
        raise InvalidParam(f"Monto inválido: {amount!r}") from exc
    if math.isnan(v) or math.isinf(v) or v <= 0:
        raise InvalidParam(f"El monto debe ser mayor que 0 (recibido {amount!r}).")
    return v


def validate_payment_method(method: Any) -> str:
    m = (method or "").strip().lower() if isinstance(method, str) else method
    if m not in PAYMENT_METHODS:
        raise InvalidParam(f"Método de pago inválido: {method!r}. Use uno de {PAYMENT_METHODS}.")
    return m


def validate_required_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidParam(f"{field} es requerido.")
    return value.strip()
