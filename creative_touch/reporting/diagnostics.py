# creative_touch/reporting/diagnostics.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional
import logging

from .config import AppConfig
from .dto import ReportQuery
from .loader import DataRepository

logger = logging.getLogger(__name__)


class DiagnosticsHandler:
    """Devuelve diagnóstico básico del snapshot."""

    def __init__(self, cfg: Optional[AppConfig] = None) -> None:
        self._cfg = cfg or AppConfig()

    def run(self, repo: DataRepository, q: ReportQuery, today: Optional[date] = None) -> List[Dict[str, Any]]:
        if not (repo.roster or repo.transactions or repo.advances or repo.expenses or repo.invalid_documents):
            return [{"message": "Snapshot vacío o export no cargado."}]
        known = {s.id for s in repo.roster}
        out: Dict[str, Any] = {
            "data_dir": str(self._cfg.data_dir),
            "roster": len(repo.roster),
            "transactions": len(repo.transactions),
            "advances": len(repo.advances),
            "expenses": len(repo.expenses),
            # registros que ningún resumen por barbero puede atribuir
            "unattributed_transactions": sum(1 for t in repo.transactions if t.staff_id not in known),
            "unattributed_advances": sum(1 for a in repo.advances if a.staff_id not in known),
            "duplicate_staff_ids": len(repo.roster) - len(known),
            # documentos descartados al cargar, por archivo
            "invalid_documents": dict(repo.invalid_documents),
        }
        return [out]
