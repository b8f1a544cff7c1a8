# creative_touch/reporting/agg/activity.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional
import logging

from ..config import AppConfig
from ..dto import ActivityItem, AdvanceRequest, Expense, ReportQuery, SalesTransaction
from ..loader import DataRepository, valid_models
from ..schema import CASH
from .base import IModeHandler

logger = logging.getLogger(__name__)


def _aware(ts: datetime) -> datetime:
    """Timestamps naive se interpretan en hora local."""
    return ts if ts.tzinfo is not None else ts.astimezone()


def _fmt_amount(v: float) -> str:
    return f"{v:g}"


def recent_activity(
    transactions: Iterable[Any],
    advances: Iterable[Any],
    expenses: Iterable[Any],
    now: Optional[datetime] = None,
    lookback_hours: int = 24,
    limit: int = 8,
) -> List[ActivityItem]:
    """Últimos movimientos (ventas, adelantos, gastos), más recientes primero.
    Registros sin created_at no entran al feed.
    """
    ref = _aware(now or datetime.now().astimezone())
    since = ref - timedelta(hours=lookback_hours)
    items: List[ActivityItem] = []

    sales, tx_invalid = valid_models(transactions, SalesTransaction)
    requests, adv_invalid = valid_models(advances, AdvanceRequest)
    spending, ex_invalid = valid_models(expenses, Expense)
    if tx_invalid or adv_invalid or ex_invalid:
        logger.debug(
            "Registros inválidos fuera del feed: transactions=%d, advances=%d, expenses=%d",
            tx_invalid, adv_invalid, ex_invalid,
        )

    for t in sales:
        if t.created_at is None:
            continue
        channel = "نقداً" if t.payment_method == CASH else "بالبطاقة"
        items.append(ActivityItem(
            id=f"payment-{t.id}",
            kind="sale",
            title="مبيعة جديدة",
            description=f"تم تسجيل {_fmt_amount(t.amount)} ر.س من {t.staff_name or 'حلاق'} {channel}",
            amount=t.amount,
            timestamp=_aware(t.created_at),
        ))

    for a in requests:
        if a.created_at is None:
            continue
        items.append(ActivityItem(
            id=f"advance-{a.id}",
            kind="advance",
            title="سلفة جديدة",
            description=f"تم صرف سلفة {_fmt_amount(a.amount)} ر.س لـ {a.staff_name or 'حلاق'}",
            amount=a.amount,
            timestamp=_aware(a.created_at),
        ))

    for e in spending:
        if e.created_at is None:
            continue
        items.append(ActivityItem(
            id=f"expense-{e.id}",
            kind="expense",
            title="مصروف جديد",
            description=f"تم إضافة مصروف {e.description or 'عام'} بقيمة {_fmt_amount(e.amount)} ر.س",
            amount=e.amount,
            timestamp=_aware(e.created_at),
        ))

    recent = [it for it in items if since <= it.timestamp <= ref]
    recent.sort(key=lambda it: it.timestamp, reverse=True)
    return recent[:limit]


class ActivityHandler(IModeHandler):
    """Feed de actividad reciente; ignora la ventana de fechas."""

    def __init__(self, cfg: Optional[AppConfig] = None) -> None:
        self._cfg = cfg or AppConfig()

    def run(self, repo: DataRepository, q: ReportQuery, today: Optional[date] = None) -> List[Dict[str, Any]]:
        transactions, advances = repo.transactions, repo.advances
        if q.staff_ids:
            wanted = set(q.staff_ids)
            transactions = [t for t in transactions if t.staff_id in wanted]
            advances = [a for a in advances if a.staff_id in wanted]
        feed = recent_activity(
            transactions,
            advances,
            repo.expenses,
            lookback_hours=self._cfg.activity_lookback_hours,
            limit=self._cfg.activity_limit,
        )
        return [it.model_dump() for it in feed]
