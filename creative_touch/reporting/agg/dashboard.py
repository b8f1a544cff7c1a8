# creative_touch/reporting/agg/dashboard.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional
import logging

from ..config import AppConfig
from ..dto import DashboardStats, Expense, ReportQuery, SalesTransaction, StaffMember, TimeWindowSpec
from ..filters import apply_date_filter
from ..loader import DataRepository, expenses_frame, transactions_frame, valid_models
from ..schema import AMOUNT, CARD, CASH, PAYMENT_METHOD
from ..windows import resolve_window
from .base import IModeHandler

logger = logging.getLogger(__name__)


def dashboard_stats(
    roster: Iterable[Any],
    transactions: Iterable[Any],
    expenses: Iterable[Any],
    window: TimeWindowSpec,
    today: Optional[date] = None,
) -> DashboardStats:
    """Totales del local: ingresos por canal, gastos y utilidad neta (puede ser negativa).

    A nivel local no hace falta atribuir ventas: cuentan todas las de la ventana.
    Los gastos son del local, no de un barbero.
    """
    staff, staff_invalid = valid_models(roster, StaffMember)
    tx_models, tx_invalid = valid_models(transactions, SalesTransaction)
    ex_models, ex_invalid = valid_models(expenses, Expense)
    if staff_invalid or tx_invalid or ex_invalid:
        logger.debug(
            "Registros inválidos descartados: roster=%d, transactions=%d, expenses=%d",
            staff_invalid, tx_invalid, ex_invalid,
        )

    start, end = resolve_window(window, today)
    tx = apply_date_filter(transactions_frame(tx_models), start, end)
    ex = apply_date_filter(expenses_frame(ex_models), start, end)

    cash = float(tx.loc[tx[PAYMENT_METHOD] == CASH, AMOUNT].sum())
    card = float(tx.loc[tx[PAYMENT_METHOD] == CARD, AMOUNT].sum())
    revenue = cash + card
    spent = float(ex[AMOUNT].sum())

    return DashboardStats(
        total_revenue=revenue,
        total_cash=cash,
        total_card=card,
        expenses=spent,
        net_profit=revenue - spent,
        active_staff=len(staff),
    )


class DashboardHandler(IModeHandler):
    """KPIs del local (una sola fila).

    Siempre es el local completo: `staff_ids` se ignora (el servicio lo avisa),
    porque los gastos no se atribuyen a barberos.
    """

    def __init__(self, cfg: Optional[AppConfig] = None) -> None:
        self._cfg = cfg or AppConfig()

    def run(self, repo: DataRepository, q: ReportQuery, today: Optional[date] = None) -> List[Dict[str, Any]]:
        stats = dashboard_stats(repo.roster, repo.transactions, repo.expenses, q.window(), today=today)
        return [stats.model_dump()]
