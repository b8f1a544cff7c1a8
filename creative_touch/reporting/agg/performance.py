# creative_touch/reporting/agg/performance.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import logging
import numpy as np
import pandas as pd

from ..config import AppConfig
from ..dto import (
    AdvanceRequest,
    PerformanceSummary,
    ReportQuery,
    SalesTransaction,
    StaffMember,
    TimeWindowSpec,
)
from ..filters import apply_date_filter, split_attributable
from ..loader import DataRepository, advances_frame, transactions_frame, valid_models
from ..schema import APPROVED, CARD, CASH, PAYMENT_METHOD, PENDING, STAFF_ID, STATUS
from ..validators import resolve_top_k
from ..windows import resolve_window
from .base import IModeHandler, count_by_staff, sum_by_staff

logger = logging.getLogger(__name__)

StaffLike = Union[StaffMember, Mapping[str, Any]]
TransactionLike = Union[SalesTransaction, Mapping[str, Any]]
AdvanceLike = Union[AdvanceRequest, Mapping[str, Any]]


def aggregate(
    roster: Iterable[StaffLike],
    transactions: Iterable[TransactionLike],
    advances: Iterable[AdvanceLike],
    window: TimeWindowSpec,
    today: Optional[date] = None,
) -> List[PerformanceSummary]:
    """Resumen de desempeño por barbero, ordenado por ingreso descendente.

    - Un resumen por cada entrada del roster, aunque no tenga actividad.
    - Ventas y adelantos se filtran por su fecha calendario (límites inclusivos).
    - Solo los adelantos `approved` descuentan del saldo; `pending` se informa aparte.
    - Registros de un staff_id fuera del roster, o que no validan, se descartan en silencio.
    - Empates de ingreso conservan el orden del roster.

    Función pura: no modifica las entradas ni hace I/O.
    """
    staff, staff_invalid = valid_models(roster, StaffMember)
    if not staff:
        return []

    start, end = resolve_window(window, today)
    roster_ids = [s.id for s in staff]

    # 1) Filtrado por ventana (registros que no validan se descartan)
    tx_models, tx_invalid = valid_models(transactions, SalesTransaction)
    adv_models, adv_invalid = valid_models(advances, AdvanceRequest)
    tx = apply_date_filter(transactions_frame(tx_models), start, end)
    adv = apply_date_filter(advances_frame(adv_models), start, end)

    tx, tx_dropped = split_attributable(tx, roster_ids)
    adv, adv_dropped = split_attributable(adv, roster_ids)
    tx_dropped += tx_invalid
    adv_dropped += adv_invalid
    if tx_dropped or adv_dropped or staff_invalid:
        logger.debug(
            "Descartados (staff_id desconocido o inválidos): roster=%d, transactions=%d, advances=%d",
            staff_invalid, tx_dropped, adv_dropped,
        )

    # 2) Acumuladores en cero, uno por barbero (orden del roster)
    index = pd.Index(roster_ids, name=STAFF_ID)

    # 3) Ventas por canal
    cash = sum_by_staff(tx[tx[PAYMENT_METHOD] == CASH], index)
    card = sum_by_staff(tx[tx[PAYMENT_METHOD] == CARD], index)
    revenue = cash + card
    count = count_by_staff(tx, index)

    # 4) Adelantos: solo aprobados descuentan
    approved = sum_by_staff(adv[adv[STATUS] == APPROVED], index)
    pending = sum_by_staff(adv[adv[STATUS] == PENDING], index)

    # 5) Promedio (0 si no hubo ventas) y 6) saldo sin piso
    average = np.divide(revenue, count, out=np.zeros_like(revenue), where=count > 0)
    outstanding = revenue - approved

    rows: List[Dict[str, Any]] = [
        {
            "staff_id": member.id,
            "name": member.name,
            "avatar": member.avatar,
            "total_revenue": float(revenue[i]),
            "cash_subtotal": float(cash[i]),
            "card_subtotal": float(card[i]),
            "transaction_count": int(count[i]),
            "average_transaction": float(average[i]),
            "total_advances": float(approved[i]),
            "pending_advances": float(pending[i]),
            "outstanding_balance": float(outstanding[i]),
        }
        for i, member in enumerate(staff)
    ]

    # 7) Orden estable descendente y 8) rank 1-based
    ranked = sorted(rows, key=lambda r: r["total_revenue"], reverse=True)
    return [PerformanceSummary(**row, rank=pos) for pos, row in enumerate(ranked, start=1)]


class PerformanceHandler(IModeHandler):
    """Ranking de barberos para la ventana pedida.

    Métricas:
      - total_revenue / cash_subtotal / card_subtotal: sum(amount)
      - transaction_count, average_transaction
      - total_advances (aprobados), pending_advances
      - outstanding_balance = total_revenue - total_advances
    """

    def __init__(self, cfg: Optional[AppConfig] = None) -> None:
        self._cfg = cfg or AppConfig()

    def run(self, repo: DataRepository, q: ReportQuery, today: Optional[date] = None) -> List[Dict[str, Any]]:
        roster = repo.roster
        if q.staff_ids:
            wanted = set(q.staff_ids)
            roster = [s for s in roster if s.id in wanted]

        summaries = aggregate(roster, repo.transactions, repo.advances, q.window(), today=today)

        topk = resolve_top_k(q, self._cfg)
        if topk is not None:
            summaries = summaries[:topk]
        return [s.model_dump() for s in summaries]
