# creative_touch/reporting/filters.py
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence
import pandas as pd

from .schema import DATE, STAFF_ID


def apply_date_filter(df: pd.DataFrame, date_from: Optional[date], date_to: Optional[date]) -> pd.DataFrame:
    """Filtro inclusivo sobre la columna de fecha calendario (no sobre created_at)."""
    if df.empty or DATE not in df.columns:
        return df
    out = df
    if date_from is not None:
        out = out[out[DATE] >= pd.Timestamp(date_from)]
    if date_to is not None:
        out = out[out[DATE] <= pd.Timestamp(date_to)]
    return out


def apply_staff_filter(df: pd.DataFrame, staff_ids: Optional[Sequence[str]]) -> pd.DataFrame:
    if df.empty or not staff_ids or STAFF_ID not in df.columns:
        return df
    return df[df[STAFF_ID].isin(list(staff_ids))]


def split_attributable(df: pd.DataFrame, roster_ids: Sequence[str]) -> tuple[pd.DataFrame, int]:
    """Separa los registros atribuibles al roster. Devuelve (atribuibles, n_descartados)."""
    if df.empty or STAFF_ID not in df.columns:
        return df, 0
    known = df[STAFF_ID].isin(list(roster_ids))
    return df[known], int((~known).sum())
