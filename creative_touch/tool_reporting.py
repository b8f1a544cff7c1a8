# creative_touch/tool_reporting.py
from __future__ import annotations

from typing import Optional, List, Dict, Any
import dataclasses
from datetime import date, datetime
from decimal import Decimal
import math

import numpy as np

# === Capa de dominio =========================================================
from .reporting.config import AppConfig
from .reporting.dto import ReportQuery
from .reporting.i18n import LocaleConfig, add_formatted_fields
from .reporting.service import run_report_query

# Config por defecto
DEFAULT_CFG = AppConfig()

# Campos monetarios que reciben versión formateada (*_fmt) por modo
CURRENCY_FIELDS: Dict[str, List[str]] = {
    "performance": [
        "total_revenue", "cash_subtotal", "card_subtotal", "average_transaction",
        "total_advances", "pending_advances", "outstanding_balance",
    ],
    "dashboard": ["total_revenue", "total_cash", "total_card", "expenses", "net_profit"],
    "advances": ["total_amount", "average_amount"],
    "activity": ["amount"],
    "diagnostics": [],
}


# ------------------------------- Helpers -------------------------------------
def _norm_mode(x: Optional[str]) -> Optional[str]:
    if not x:
        return x
    v = x.lower().strip()
    mapping = {
        # performance
        "ranking": "performance",
        "rank": "performance",
        "leaderboard": "performance",
        "barbers": "performance",
        "الأداء": "performance",
        # dashboard
        "summary": "dashboard",
        "stats": "dashboard",
        "overview": "dashboard",
        # advances
        "advance": "advances",
        "سلف": "advances",
        # activity
        "recent": "activity",
        "updates": "activity",
        "diag": "diagnostics",
    }
    return mapping.get(v, v)


def _norm_period(x: Optional[str]) -> str:
    if not x:
        return "month"
    v = x.lower().strip()
    mapping = {
        "daily": "today",
        "day": "today",
        "اليوم": "today",
        "weekly": "week",
        "last_7_days": "week",
        "last-7-days": "week",
        "الأسبوع": "week",
        "monthly": "month",
        "الشهر": "month",
        "yearly": "year",
        "السنة": "year",
        "range": "custom",
        "مخصص": "custom",
    }
    return mapping.get(v, v)


def _json_safe(obj: Any) -> Any:
    """Convierte recursivamente a tipos JSON-serializables."""
    # escalares especiales
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        return None

    # numpy
    if isinstance(obj, np.generic):
        return _json_safe(obj.item())
    if isinstance(obj, np.ndarray):
        return [_json_safe(x) for x in obj.tolist()]

    # estructuras
    if isinstance(obj, dict):
        return {str(k): _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_json_safe(v) for v in obj]

    # dataclass
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _json_safe(dataclasses.asdict(obj))

    # pydantic v2
    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return _json_safe(model_dump())

    return obj


def _with_formatted(mode: str, rows: List[Dict[str, Any]], cfg: AppConfig) -> List[Dict[str, Any]]:
    fields = CURRENCY_FIELDS.get(mode, [])
    if not fields:
        return rows
    loc = LocaleConfig(locale=cfg.locale, currency=cfg.currency, currency_symbol=cfg.currency_symbol)
    return [add_formatted_fields(r, fields, cfg=loc) for r in rows]


# --------------------------- API pública -------------------------------------
def reporting_insights(
    mode: str,
    period: Optional[str] = None,
    date_from: Optional[str] = None,   # "YYYY-MM-DD"
    date_to: Optional[str] = None,     # "YYYY-MM-DD"
    staff_ids: Optional[List[str]] = None,
    top_k: Optional[int] = None,
    app_cfg: Optional[AppConfig] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Fachada JSON-friendly sobre el servicio de reportes.

    Parámetros:
      - mode: "performance" (ranking por barbero), "dashboard" (totales del local),
        "advances" (resumen de adelantos), "activity" (feed reciente), "diagnostics".
        Se aceptan sinónimos ("ranking", "summary", ...).
      - period: "today" | "week" | "month" | "year" | "custom" (sinónimos en inglés y árabe).
      - date_from/date_to: rango "YYYY-MM-DD", requerido con period="custom".
      - staff_ids: filtro por barbero.
      - top_k: recorte del ranking.

    Retorna:
      dict JSON-serializable con llaves: ok, mode, filters, meta, data, warnings (o error).
    """
    cfg = app_cfg or DEFAULT_CFG
    mode_norm = _norm_mode(mode)
    period_norm = _norm_period(period)

    # Validaciones ligeras
    if top_k is not None and (isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0):
        return {"ok": False, "mode": mode_norm, "data": [], "error": f"top_k inválido: {top_k}"}

    try:
        q = ReportQuery(
            mode=mode_norm,
            period=period_norm,
            date_from=date_from,
            date_to=date_to,
            staff_ids=staff_ids or [],
            top_k=top_k,
            locale=cfg.locale,
            currency=cfg.currency,
        )
        result = run_report_query(q=q, app_cfg=cfg, today=today)
    except Exception as exc:
        return {
            "ok": False,
            "mode": mode_norm,
            "data": [],
            "error": f"{type(exc).__name__}: {exc}",
        }

    payload: Dict[str, Any] = _json_safe(result)
    if payload.get("ok"):
        payload["data"] = _with_formatted(result.mode, payload["data"], cfg)
    else:
        first = payload["data"][0] if payload.get("data") else {}
        payload["error"] = first.get("error", "Unknown error")
    payload["count"] = len(payload.get("data", []))
    return payload
