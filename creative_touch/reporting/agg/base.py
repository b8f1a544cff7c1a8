# creative_touch/reporting/agg/base.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Protocol
import logging

import numpy as np
import pandas as pd

from ..config import AppConfig
from ..dto import ReportQuery
from ..loader import DataRepository
from ..schema import AMOUNT, STAFF_ID

logger = logging.getLogger(__name__)


class IModeHandler(Protocol):
    """Contratos de los agregadores por modo."""
    def run(self, repo: DataRepository, q: ReportQuery, today: Optional[date] = None) -> List[Dict[str, Any]]: ...


def sum_by_staff(df: pd.DataFrame, index: pd.Index) -> np.ndarray:
    """Suma de montos por barbero, alineada a `index` (cero si no hubo registros)."""
    if df.empty:
        return np.zeros(len(index), dtype="float64")
    sums = df.groupby(STAFF_ID)[AMOUNT].sum()
    return sums.reindex(index, fill_value=0.0).astype("float64").to_numpy()


def count_by_staff(df: pd.DataFrame, index: pd.Index) -> np.ndarray:
    if df.empty:
        return np.zeros(len(index), dtype="int64")
    counts = df.groupby(STAFF_ID).size()
    return counts.reindex(index, fill_value=0).astype("int64").to_numpy()


def get_handler(mode: str, cfg: Optional[AppConfig] = None) -> IModeHandler:
    """Devuelve el handler adecuado para el modo."""
    cfg = cfg or AppConfig()
    if mode == "performance":
        from .performance import PerformanceHandler
        return PerformanceHandler(cfg)
    if mode == "dashboard":
        from .dashboard import DashboardHandler
        return DashboardHandler(cfg)
    if mode == "advances":
        from .advances import AdvancesHandler
        return AdvancesHandler(cfg)
    if mode == "activity":
        from .activity import ActivityHandler
        return ActivityHandler(cfg)
    if mode == "diagnostics":
        from ..diagnostics import DiagnosticsHandler
        return DiagnosticsHandler(cfg)
    raise ValueError(f"Modo no soportado: {mode}")
