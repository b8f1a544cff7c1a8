# creative_touch/reporting/loader.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar
import json
import logging
import pandas as pd
from pydantic import BaseModel, ValidationError

from .config import AppConfig
from .dto import AdvanceRequest, Expense, SalesTransaction, StaffMember
from .exceptions import SchemaMismatch
from .schema import (
    ADVANCE_COLS,
    AMOUNT,
    COLLECTION_FILES,
    DATE,
    EXPENSE_COLS,
    TRANSACTION_COLS,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class DataRepository:
    """Snapshot inmutable de las colecciones del document store.

    `invalid_documents` cuenta, por archivo, los documentos descartados por no
    cumplir el esquema.
    """
    roster: List[StaffMember] = field(default_factory=list)
    transactions: List[SalesTransaction] = field(default_factory=list)
    advances: List[AdvanceRequest] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    invalid_documents: Dict[str, int] = field(default_factory=dict)


# ------------------------- Coerción de registros -----------------------------

def valid_models(items: Optional[Iterable[Any]], model: Type[M]) -> Tuple[List[M], int]:
    """Acepta modelos o mappings crudos; nunca modifica la entrada.

    Los registros que no validan se descartan: retorna (válidos, n_descartados).
    """
    valid: List[M] = []
    dropped = 0
    for it in items or []:
        if isinstance(it, model):
            valid.append(it)
            continue
        try:
            valid.append(model.model_validate(it))
        except ValidationError:
            dropped += 1
    return valid, dropped


def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    """Coerción de tipos: monto a float, fecha calendario a datetime64."""
    out = df.copy()
    if AMOUNT in out.columns:
        out[AMOUNT] = pd.to_numeric(out[AMOUNT], errors="coerce").astype("float64")
    if DATE in out.columns:
        out[DATE] = pd.to_datetime(out[DATE], errors="coerce")
    return out


# --------------------- Frames para los agregadores (puro) --------------------

def transactions_frame(transactions: Iterable[SalesTransaction]) -> pd.DataFrame:
    rows = [(t.staff_id, t.amount, t.payment_method, t.date) for t in transactions]
    return _coerce_types(pd.DataFrame(rows, columns=TRANSACTION_COLS))


def advances_frame(advances: Iterable[AdvanceRequest]) -> pd.DataFrame:
    """La fecha es `effective_date`: `date` o, si falta, el día local de created_at."""
    rows = [(a.staff_id, a.amount, a.status, a.effective_date) for a in advances]
    return _coerce_types(pd.DataFrame(rows, columns=ADVANCE_COLS))


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    rows = [(e.amount, e.date) for e in expenses]
    return _coerce_types(pd.DataFrame(rows, columns=EXPENSE_COLS))


# -------------------------- Carga del snapshot --------------------------------

def _read_collection(path: Path, model: Type[M]) -> Tuple[List[M], int]:
    """Lee un export JSON: lista de documentos o dict {doc_id: documento}.

    Documentos que no cumplen el esquema se descartan y se cuentan; un archivo
    ilegible o con forma inesperada levanta SchemaMismatch.
    """
    if not path.exists():
        logger.warning("Colección no encontrada en %s. Se usa vacía.", path)
        return [], 0
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaMismatch(f"JSON inválido en {path.name}: {exc}") from exc

    if isinstance(raw, dict):
        raw = [{"id": doc_id, **doc} if isinstance(doc, dict) else doc for doc_id, doc in raw.items()]
    if not isinstance(raw, list):
        raise SchemaMismatch(f"{path.name} debe contener una lista o un objeto de documentos.")

    docs, dropped = valid_models(raw, model)
    if dropped:
        logger.warning(
            "%s: %d documentos no cumplen el esquema de %s y se descartan.",
            path.name, dropped, model.__name__,
        )
    return docs, dropped


def load_snapshot(cfg: Optional[AppConfig] = None) -> DataRepository:
    """Carga un snapshot fresco del export. Sin caché: cada refresh vuelve a leer."""
    cfg = cfg or AppConfig()
    base = Path(cfg.data_dir)
    logger.info("Cargando snapshot desde %s", base)

    collections: Dict[str, List[Any]] = {}
    invalid: Dict[str, int] = {}
    for key, model in (
        ("roster", StaffMember),
        ("transactions", SalesTransaction),
        ("advances", AdvanceRequest),
        ("expenses", Expense),
    ):
        name = COLLECTION_FILES[key]
        collections[key], dropped = _read_collection(base / name, model)
        if dropped:
            invalid[name] = dropped

    repo = DataRepository(**collections, invalid_documents=invalid)
    logger.info(
        "Snapshot cargado: roster=%d, transactions=%d, advances=%d, expenses=%d, inválidos=%d",
        len(repo.roster), len(repo.transactions), len(repo.advances), len(repo.expenses),
        sum(invalid.values()),
    )
    return repo
