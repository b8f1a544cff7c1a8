# creative_touch/reporting/schema.py
from __future__ import annotations

from typing import Final, List, Tuple

# Nombres canónicos de columnas (evita strings sueltos en el resto del código)
STAFF_ID: Final[str] = "staff_id"
AMOUNT: Final[str] = "amount"
PAYMENT_METHOD: Final[str] = "payment_method"
DATE: Final[str] = "date"
STATUS: Final[str] = "status"

# Conjuntos cerrados
CASH: Final[str] = "cash"
CARD: Final[str] = "card"
PAYMENT_METHODS: Final[Tuple[str, str]] = (CASH, CARD)

PENDING: Final[str] = "pending"
APPROVED: Final[str] = "approved"
REJECTED: Final[str] = "rejected"
ADVANCE_STATUSES: Final[Tuple[str, str, str]] = (PENDING, APPROVED, REJECTED)

# Columnas de los frames que arman los agregadores
TRANSACTION_COLS: Final[List[str]] = [STAFF_ID, AMOUNT, PAYMENT_METHOD, DATE]
ADVANCE_COLS: Final[List[str]] = [STAFF_ID, AMOUNT, STATUS, DATE]
EXPENSE_COLS: Final[List[str]] = [AMOUNT, DATE]

# Colecciones del export del document store (nombre lógico -> archivo)
COLLECTION_FILES: Final[dict] = {
    "roster": "barbers.json",
    "transactions": "dailyRecords.json",
    "advances": "advances.json",
    "expenses": "expenseRecords.json",
}

# Reglas contables (documentadas; la verificación vive en los tests)
REVENUE_RULE: Final[str] = "total_revenue = cash_subtotal + card_subtotal"
BALANCE_RULE: Final[str] = "outstanding_balance = total_revenue - total_advances(approved)"
