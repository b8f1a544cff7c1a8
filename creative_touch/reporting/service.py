# creative_touch/reporting/service.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional
import logging

from .config import AppConfig
from .dto import ReportQuery, ReportResult
from .exceptions import ReportingError
from .formatters import build_filter_echo, to_error, to_result
from .loader import DataRepository, load_snapshot
from .validators import resolve_top_k, validate_query
from .agg.base import get_handler

logger = logging.getLogger(__name__)


def _collect_warnings(q: ReportQuery, repo: DataRepository) -> List[str]:
    warnings: List[str] = []
    if q.period != "custom" and (q.date_from or q.date_to):
        warnings.append(f"date_from/date_to ignorados: period='{q.period}'.")
    if q.mode == "performance" and not repo.roster:
        warnings.append("Roster vacío: no hay barberos para resumir.")
    if q.mode == "dashboard" and q.staff_ids:
        warnings.append("staff_ids ignorado: el dashboard resume el local completo (gastos incluidos).")
    if repo.invalid_documents:
        detail = ", ".join(f"{name}={n}" for name, n in sorted(repo.invalid_documents.items()))
        warnings.append(f"Documentos inválidos descartados: {detail}.")
    return warnings


def run_report_query(
    q: ReportQuery,
    app_cfg: Optional[AppConfig] = None,
    today: Optional[date] = None,
    repo: Optional[DataRepository] = None,
) -> ReportResult:
    """
    Punto de entrada del core. Orquesta:
    validación -> snapshot -> handler -> payload (ReportResult).
    Sin `repo` se carga un snapshot fresco del export configurado.
    """
    cfg = app_cfg or AppConfig()
    try:
        validate_query(q)

        topk = resolve_top_k(q, cfg)
        filters = build_filter_echo(q, top_k_resolved=topk)

        snapshot = repo if repo is not None else load_snapshot(cfg)
        handler = get_handler(q.mode, cfg)

        data: List[Dict[str, Any]] = handler.run(snapshot, q, today=today)
        return to_result(mode=q.mode, filters=filters, data=data, warnings=_collect_warnings(q, snapshot))

    except ReportingError as err:
        logger.exception("Error de dominio en reporting service.")
        return to_error(q.mode, build_filter_echo(q, top_k_resolved=None), {"error": str(err)})
    except Exception as ex:
        logger.exception("Fallo no controlado en reporting service.")
        return to_error(
            q.mode,
            build_filter_echo(q, top_k_resolved=None),
            {"error": "Unexpected error", "detail": str(ex)},
        )
