# creative_touch/reporting/dto.py
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

# —— Literales y tipos ——
PaymentMethodLiteral = Literal["cash", "card"]
AdvanceStatusLiteral = Literal["pending", "approved", "rejected"]
WindowKindLiteral = Literal["today", "week", "month", "year", "custom"]
ModeLiteral = Literal["performance", "dashboard", "advances", "activity", "diagnostics"]
ActivityKindLiteral = Literal["sale", "advance", "expense"]


def _coerce_store_timestamp(v: Any) -> Any:
    """Acepta el formato de timestamp exportado por el document store
    ({"seconds": ..., "nanoseconds": ...}) además de ISO-8601 / datetime."""
    if isinstance(v, dict) and "seconds" in v:
        try:
            secs = float(v["seconds"]) + float(v.get("nanoseconds", 0)) / 1e9
            return dt.datetime.fromtimestamp(secs, tz=dt.timezone.utc)
        except (TypeError, OverflowError, OSError) as exc:
            # ValueError para que pydantic lo reporte como ValidationError
            raise ValueError(f"timestamp inválido: {v!r}") from exc
    return v


class _StoreRecord(BaseModel):
    """Registro tal como vive en el document store (camelCase aceptado)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ─────────────────────────────── Registros ────────────────────────────────────

class StaffMember(_StoreRecord):
    """Barbero del roster."""
    id: str
    name: str
    avatar: str = ""
    email: Optional[str] = None
    join_date: Optional[dt.date] = Field(default=None, alias="joinDate")


class SalesTransaction(_StoreRecord):
    """Venta auto-reportada por un barbero (dailyRecords)."""
    id: str
    staff_id: str = Field(alias="barberId")
    staff_name: Optional[str] = Field(default=None, alias="barberName")
    amount: float
    payment_method: PaymentMethodLiteral = Field(alias="paymentMethod")
    date: dt.date
    created_at: Optional[dt.datetime] = Field(default=None, alias="createdAt")

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, v: Any) -> Any:
        return _coerce_store_timestamp(v)


class AdvanceRequest(_StoreRecord):
    """Solicitud de adelanto de efectivo. Estado: pending -> approved | rejected."""
    id: str
    staff_id: str = Field(alias="barberId")
    staff_name: Optional[str] = Field(default=None, alias="barberName")
    amount: float
    reason: str = ""
    status: AdvanceStatusLiteral = "pending"
    date: Optional[dt.date] = None
    created_at: Optional[dt.datetime] = Field(default=None, alias="createdAt")
    resolved_at: Optional[dt.datetime] = Field(
        default=None, validation_alias=AliasChoices("resolved_at", "resolvedAt", "approvedAt")
    )
    resolved_by: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("resolved_by", "resolvedBy", "approvedBy")
    )

    @field_validator("created_at", "resolved_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, v: Any) -> Any:
        return _coerce_store_timestamp(v)

    @property
    def effective_date(self) -> Optional[dt.date]:
        """Fecha calendario usada para filtrar por ventana.
        Si falta `date`, se usa el día local de `created_at`.
        """
        if self.date is not None:
            return self.date
        if self.created_at is None:
            return None
        ts = self.created_at.astimezone() if self.created_at.tzinfo else self.created_at
        return ts.date()


class Expense(_StoreRecord):
    """Gasto del local (expenseRecords)."""
    id: str
    amount: float
    description: str = ""
    date: dt.date
    created_at: Optional[dt.datetime] = Field(default=None, alias="createdAt")

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, v: Any) -> Any:
        return _coerce_store_timestamp(v)


# ─────────────────────────────── Ventanas ─────────────────────────────────────

class TimeWindowSpec(BaseModel):
    """Ventana de agregación. Solo `custom` lleva límites explícitos (inclusivos)."""
    model_config = ConfigDict(frozen=True)

    kind: WindowKindLiteral = "today"
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    @model_validator(mode="after")
    def _check_custom_bounds(self) -> "TimeWindowSpec":
        if self.kind == "custom":
            if self.start is None or self.end is None:
                raise ValueError("La ventana 'custom' requiere start y end.")
            if self.start > self.end:
                raise ValueError("start no puede ser mayor que end.")
        return self

    @classmethod
    def custom(cls, start: dt.date, end: dt.date) -> "TimeWindowSpec":
        return cls(kind="custom", start=start, end=end)


# ─────────────────────────────── Salidas ──────────────────────────────────────

class PerformanceSummary(BaseModel):
    """Resumen derivado por barbero (no se persiste)."""
    model_config = ConfigDict(frozen=True)

    staff_id: str
    name: str
    avatar: str = ""
    total_revenue: float = 0.0
    cash_subtotal: float = 0.0
    card_subtotal: float = 0.0
    transaction_count: int = 0
    average_transaction: float = 0.0
    total_advances: float = 0.0
    pending_advances: float = 0.0
    outstanding_balance: float = 0.0
    rank: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_overdrawn(self) -> bool:
        return self.outstanding_balance < 0


class DashboardStats(BaseModel):
    """Totales del local para la ventana."""
    total_revenue: float = 0.0
    total_cash: float = 0.0
    total_card: float = 0.0
    expenses: float = 0.0
    net_profit: float = 0.0
    active_staff: int = 0


class StatusBucket(BaseModel):
    count: int = 0
    amount: float = 0.0


class AdvanceStats(BaseModel):
    """Conteos y montos de adelantos, global y por estado."""
    count: int = 0
    total_amount: float = 0.0
    average_amount: float = 0.0
    by_status: Dict[str, StatusBucket] = Field(default_factory=dict)


class ActivityItem(BaseModel):
    id: str
    kind: ActivityKindLiteral
    title: str
    description: str
    amount: float
    timestamp: dt.datetime


# ─────────────────────────────── Query / resultado ────────────────────────────

class ReportQuery(BaseModel):
    """Contrato de entrada del servicio de reportes."""
    mode: ModeLiteral
    period: WindowKindLiteral = "month"
    date_from: Optional[dt.date] = Field(
        default=None, description="Requerido cuando period='custom'."
    )
    date_to: Optional[dt.date] = None
    staff_ids: Optional[List[str]] = None
    top_k: Optional[int] = None  # None => todo el roster

    # locales / meta
    locale: str = "ar-SA"
    currency: str = "SAR"

    @field_validator("staff_ids")
    @classmethod
    def _normalize_staff_ids(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        out = [s.strip() for s in v if isinstance(s, str) and s.strip()]
        return out or None  # si queda vacío, tratar como None (sin filtro)

    def window(self) -> TimeWindowSpec:
        if self.period == "custom":
            return TimeWindowSpec.custom(self.date_from, self.date_to)  # type: ignore[arg-type]
        return TimeWindowSpec(kind=self.period)


class FilterEcho(BaseModel):
    """Se devuelve en la respuesta para transparencia de filtros aplicados."""
    period: WindowKindLiteral = "month"
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None
    staff_ids: List[str] = Field(default_factory=list)
    top_k: Optional[int] = None
    locale: str = "ar-SA"
    currency: str = "SAR"


class MetaInfo(BaseModel):
    row_count: int
    generated_at: str
    currency: str
    locale: str


class ReportResult(BaseModel):
    """Contrato de salida: estable, serializable y amigable para UI."""
    ok: bool
    mode: ModeLiteral
    filters: FilterEcho
    warnings: List[str] = Field(default_factory=list)
    meta: MetaInfo
    data: List[Dict[str, Any]] = Field(default_factory=list)
