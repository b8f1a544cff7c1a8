# creative_touch/reporting/formatters.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .dto import FilterEcho, MetaInfo, ReportQuery, ReportResult


def build_filter_echo(q: ReportQuery, top_k_resolved: Optional[int]) -> FilterEcho:
    return FilterEcho(
        period=q.period,
        date_from=q.date_from,
        date_to=q.date_to,
        staff_ids=q.staff_ids or [],
        top_k=top_k_resolved,
        locale=q.locale,
        currency=q.currency,
    )


def build_meta(row_count: int, locale: str, currency: str) -> MetaInfo:
    ts = datetime.now(tz=timezone.utc).isoformat(timespec="seconds")
    return MetaInfo(row_count=row_count, generated_at=ts, currency=currency, locale=locale)


def to_result(mode: str, filters: FilterEcho, data: List[Dict[str, Any]], warnings: Optional[List[str]] = None) -> ReportResult:
    meta = build_meta(row_count=len(data), locale=filters.locale, currency=filters.currency)
    return ReportResult(ok=True, mode=mode, filters=filters, warnings=warnings or [], meta=meta, data=data)


def to_error(mode: str, filters: FilterEcho, error: Dict[str, Any]) -> ReportResult:
    meta = build_meta(row_count=0, locale=filters.locale, currency=filters.currency)
    return ReportResult(ok=False, mode=mode, filters=filters, warnings=[], meta=meta, data=[error])
