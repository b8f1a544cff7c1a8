# creative_touch/reporting/agg/advances.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional
import logging

from ..config import AppConfig
from ..dto import AdvanceRequest, AdvanceStats, ReportQuery, StatusBucket, TimeWindowSpec
from ..filters import apply_date_filter, apply_staff_filter
from ..loader import DataRepository, advances_frame, valid_models
from ..schema import ADVANCE_STATUSES, AMOUNT, STATUS
from ..windows import resolve_window
from .base import IModeHandler

logger = logging.getLogger(__name__)


def advance_stats(
    advances: Iterable[Any],
    window: TimeWindowSpec,
    today: Optional[date] = None,
    staff_ids: Optional[List[str]] = None,
) -> AdvanceStats:
    """Conteo, total y promedio de adelantos; desglose por estado."""
    models, invalid = valid_models(advances, AdvanceRequest)
    if invalid:
        logger.debug("Adelantos inválidos descartados: %d", invalid)

    start, end = resolve_window(window, today)
    adv = apply_date_filter(advances_frame(models), start, end)
    adv = apply_staff_filter(adv, staff_ids)

    n = int(len(adv))
    total = float(adv[AMOUNT].sum()) if n else 0.0
    by_status = {
        status: StatusBucket(
            count=int((adv[STATUS] == status).sum()) if n else 0,
            amount=float(adv.loc[adv[STATUS] == status, AMOUNT].sum()) if n else 0.0,
        )
        for status in ADVANCE_STATUSES
    }
    return AdvanceStats(
        count=n,
        total_amount=total,
        average_amount=(total / n) if n else 0.0,
        by_status=by_status,
    )


class AdvancesHandler(IModeHandler):
    """Resumen de adelantos de la ventana (una fila)."""

    def __init__(self, cfg: Optional[AppConfig] = None) -> None:
        self._cfg = cfg or AppConfig()

    def run(self, repo: DataRepository, q: ReportQuery, today: Optional[date] = None) -> List[Dict[str, Any]]:
        stats = advance_stats(repo.advances, q.window(), today=today, staff_ids=q.staff_ids)
        return [stats.model_dump()]
