# creative_touch/tests/test_shop_summaries.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from creative_touch.reporting.agg.activity import recent_activity
from creative_touch.reporting.agg.advances import advance_stats
from creative_touch.reporting.agg.dashboard import dashboard_stats
from creative_touch.reporting.dto import AdvanceRequest, Expense, SalesTransaction, StaffMember, TimeWindowSpec

D = date(2025, 3, 15)
MARCH = TimeWindowSpec.custom(date(2025, 3, 1), date(2025, 3, 31))
NOW = datetime(2025, 3, 15, 20, 0, tzinfo=timezone.utc)


def _tx(tid, sid, amount, method, d=D, created_at=None):
    return SalesTransaction(id=tid, staff_id=sid, staff_name=f"Barber {sid}", amount=amount,
                            payment_method=method, date=d, created_at=created_at)


def _adv(aid, sid, amount, status, d=D, created_at=None):
    return AdvanceRequest(id=aid, staff_id=sid, staff_name=f"Barber {sid}", amount=amount,
                          status=status, date=d, created_at=created_at)


# ------------------------------ Dashboard -------------------------------------


def test_dashboard_totals_and_net_profit() -> None:
    roster = [StaffMember(id="A", name="A"), StaffMember(id="B", name="B")]
    txs = [
        _tx("t1", "A", 100, "cash"),
        _tx("t2", "B", 60, "card"),
        _tx("t3", "X", 40, "cash"),            # sin roster: igual cuenta a nivel local
        _tx("t4", "A", 500, "cash", d=date(2025, 4, 2)),
    ]
    expenses = [Expense(id="e1", amount=30, description="مياه", date=D)]
    stats = dashboard_stats(roster, txs, expenses, MARCH)
    assert stats.total_revenue == 200
    assert stats.total_cash == 140 and stats.total_card == 60
    assert stats.expenses == 30
    assert stats.net_profit == 170
    assert stats.active_staff == 2


def test_dashboard_net_profit_can_be_negative() -> None:
    expenses = [Expense(id="e1", amount=90, date=D)]
    stats = dashboard_stats([], [_tx("t1", "A", 10, "card")], expenses, MARCH)
    assert stats.net_profit == -80
    assert stats.active_staff == 0


def test_dashboard_empty_collections() -> None:
    stats = dashboard_stats([], [], [], TimeWindowSpec(kind="today"), today=D)
    assert stats.total_revenue == 0 and stats.expenses == 0 and stats.net_profit == 0


# ------------------------------ Adelantos -------------------------------------


def test_advance_stats_by_status() -> None:
    advs = [
        _adv("a1", "A", 100, "approved"),
        _adv("a2", "A", 50, "pending"),
        _adv("a3", "B", 30, "rejected"),
        _adv("a4", "B", 20, "approved"),
        _adv("a5", "B", 999, "approved", d=date(2025, 2, 1)),
    ]
    stats = advance_stats(advs, MARCH)
    assert stats.count == 4
    assert stats.total_amount == 200
    assert stats.average_amount == 50
    assert stats.by_status["approved"].count == 2
    assert stats.by_status["approved"].amount == 120
    assert stats.by_status["pending"].amount == 50
    assert stats.by_status["rejected"].count == 1

    only_b = advance_stats(advs, MARCH, staff_ids=["B"])
    assert only_b.count == 2 and only_b.total_amount == 50


def test_advance_stats_empty() -> None:
    stats = advance_stats([], MARCH)
    assert stats.count == 0 and stats.average_amount == 0
    assert set(stats.by_status) == {"pending", "approved", "rejected"}


# ------------------------------ Actividad -------------------------------------


def test_recent_activity_orders_and_limits() -> None:
    txs = [_tx(f"t{i}", "A", 10 * i, "cash", created_at=NOW - timedelta(hours=i)) for i in range(1, 6)]
    advs = [_adv("a1", "A", 300, "pending", created_at=NOW - timedelta(minutes=30))]
    expenses = [Expense(id="e1", amount=15, description="قهوة", date=D, created_at=NOW - timedelta(hours=2, minutes=30))]

    feed = recent_activity(txs, advs, expenses, now=NOW, lookback_hours=24, limit=4)
    assert [it.id for it in feed] == ["advance-a1", "payment-t1", "payment-t2", "expense-e1"]
    assert feed[0].kind == "advance"
    assert "300" in feed[0].description
    stamps = [it.timestamp for it in feed]
    assert stamps == sorted(stamps, reverse=True)


def test_recent_activity_respects_lookback_and_skips_undated() -> None:
    txs = [
        _tx("old", "A", 10, "card", created_at=NOW - timedelta(hours=30)),
        _tx("new", "A", 10, "card", created_at=NOW - timedelta(hours=1)),
        _tx("nodate", "A", 10, "card"),
    ]
    feed = recent_activity(txs, [], [], now=NOW)
    assert [it.id for it in feed] == ["payment-new"]


# ------------------------------ Registros inválidos ---------------------------


def test_summaries_skip_malformed_records() -> None:
    bad_tx = {"id": "tx", "barberId": "A", "amount": "abc", "paymentMethod": "cash", "date": "2025-03-15",
              "createdAt": "2025-03-15T19:00:00+00:00"}
    bad_adv = {"id": "ax", "barberId": "A", "amount": 10, "status": "paid", "date": "2025-03-15",
               "createdAt": "2025-03-15T19:00:00+00:00"}
    bad_exp = {"id": "ex", "amount": "lots", "date": "2025-03-15", "createdAt": "2025-03-15T19:00:00+00:00"}
    roster = [StaffMember(id="A", name="A"), {"avatar": "sin-id.png"}]

    txs = [_tx("t1", "A", 100, "cash", created_at=NOW - timedelta(hours=1)), bad_tx]
    advs = [_adv("a1", "A", 40, "approved", created_at=NOW - timedelta(hours=2)), bad_adv]
    expenses = [Expense(id="e1", amount=30, date=D), bad_exp]

    stats = dashboard_stats(roster, txs, expenses, MARCH)
    assert stats.total_revenue == 100 and stats.expenses == 30 and stats.net_profit == 70
    assert stats.active_staff == 1

    adv = advance_stats(advs, MARCH)
    assert adv.count == 1 and adv.total_amount == 40

    feed = recent_activity(txs, advs, [bad_exp], now=NOW)
    assert [it.id for it in feed] == ["payment-t1", "advance-a1"]
