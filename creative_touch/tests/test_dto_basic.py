# creative_touch/tests/test_dto_basic.py
from __future__ import annotations

from datetime import date, datetime, timezone
import pytest
from creative_touch.reporting.dto import AdvanceRequest, ReportQuery, SalesTransaction, TimeWindowSpec

def test_query_parses_and_normalizes():
    q = ReportQuery(
        mode="performance",
        period="custom",
        date_from=date(2025, 1, 1),
        date_to=date(2025, 10, 16),
        staff_ids=[" B001 ", "B002", " "],
        top_k=None,
        locale="ar-SA",
        currency="SAR",
    )
    assert q.mode == "performance"
    assert q.period == "custom"
    assert q.staff_ids == ["B001", "B002"]
    assert q.window() == TimeWindowSpec.custom(date(2025, 1, 1), date(2025, 10, 16))

def test_empty_staff_ids_means_no_filter():
    q = ReportQuery(mode="dashboard", staff_ids=["  "])
    assert q.staff_ids is None
    assert q.window().kind == "month"

def test_mode_invalid():
    with pytest.raises(Exception):
        ReportQuery(mode="tops")  # inválido

def test_store_export_aliases_and_timestamps():
    t = SalesTransaction.model_validate({
        "id": "r1",
        "barberId": "B001",
        "barberName": "أحمد",
        "amount": 120,
        "paymentMethod": "card",
        "date": "2025-03-15",
        "createdAt": {"seconds": 1742036400, "nanoseconds": 0},
        "time": "14:00",
    })
    assert t.staff_id == "B001"
    assert t.payment_method == "card"
    assert t.date == date(2025, 3, 15)
    assert t.created_at == datetime.fromtimestamp(1742036400, tz=timezone.utc)

def test_payment_method_is_closed_set():
    with pytest.raises(Exception):
        SalesTransaction(id="r1", staff_id="B001", amount=10, payment_method="transfer", date=date(2025, 3, 15))

def test_advance_effective_date_falls_back_to_created_at():
    a = AdvanceRequest(id="a1", staff_id="B001", amount=50, created_at=datetime(2025, 3, 15, 10, 30))
    assert a.status == "pending"
    assert a.effective_date == date(2025, 3, 15)
    assert AdvanceRequest(id="a2", staff_id="B001", amount=50).effective_date is None

def test_advance_accepts_approved_at_alias():
    a = AdvanceRequest.model_validate({
        "id": "a1", "barberId": "B001", "amount": 10, "status": "approved",
        "approvedAt": "2025-03-16T09:00:00+00:00", "approvedBy": "admin",
    })
    assert a.resolved_by == "admin"
    assert a.resolved_at == datetime(2025, 3, 16, 9, 0, tzinfo=timezone.utc)
