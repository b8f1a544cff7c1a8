# creative_touch/reporting/records.py
"""Alta de registros y ciclo de vida de adelantos.

La validación de montos vive aquí (camino de creación); los agregadores
no revalidan y propagan lo que reciban.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from .dto import AdvanceRequest, Expense, SalesTransaction, StaffMember
from .exceptions import InvalidParam, InvalidTransition
from .schema import APPROVED, PENDING, REJECTED
from .validators import validate_amount, validate_payment_method, validate_required_text


def generate_record_id(now: Optional[datetime] = None) -> str:
    """ID resistente a colisiones: timestamp + sufijo aleatorio."""
    ts = (now or datetime.now()).strftime("%Y%m%d%H%M%S%f")
    return f"{ts}-{uuid.uuid4().hex[:4]}"


def _local_now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now().astimezone()


def new_sales_transaction(
    staff: StaffMember,
    amount: object,
    payment_method: object,
    now: Optional[datetime] = None,
) -> SalesTransaction:
    """Venta auto-reportada. `date` es el día calendario local de `now`."""
    ts = _local_now(now)
    return SalesTransaction(
        id=generate_record_id(ts),
        staff_id=staff.id,
        staff_name=staff.name,
        amount=validate_amount(amount),
        payment_method=validate_payment_method(payment_method),
        date=ts.date(),
        created_at=ts,
    )


def new_advance_request(
    staff: StaffMember,
    amount: object,
    reason: object,
    now: Optional[datetime] = None,
) -> AdvanceRequest:
    ts = _local_now(now)
    return AdvanceRequest(
        id=generate_record_id(ts),
        staff_id=staff.id,
        staff_name=staff.name,
        amount=validate_amount(amount),
        reason=validate_required_text(reason, "reason"),
        status=PENDING,
        date=ts.date(),
        created_at=ts,
    )


def new_expense(amount: object, description: object, now: Optional[datetime] = None) -> Expense:
    ts = _local_now(now)
    return Expense(
        id=generate_record_id(ts),
        amount=validate_amount(amount),
        description=validate_required_text(description, "description"),
        date=ts.date(),
        created_at=ts,
    )


def resolve_advance(
    advance: AdvanceRequest,
    decision: str,
    actor: str,
    at: Optional[datetime] = None,
) -> AdvanceRequest:
    """pending -> approved | rejected, una sola vez. Devuelve un modelo nuevo."""
    if decision not in (APPROVED, REJECTED):
        raise InvalidParam(f"Decisión inválida: {decision!r}. Use '{APPROVED}' o '{REJECTED}'.")
    if advance.status != PENDING:
        raise InvalidTransition(
            f"El adelanto {advance.id} ya fue resuelto ({advance.status}); no puede pasar a {decision}."
        )
    return advance.model_copy(update={
        "status": decision,
        "resolved_at": _local_now(at),
        "resolved_by": validate_required_text(actor, "actor"),
    })
