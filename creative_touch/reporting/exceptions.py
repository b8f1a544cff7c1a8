# creative_touch/reporting/exceptions.py
from __future__ import annotations

class ReportingError(Exception):
    """Base para errores del dominio de reportes."""

class InvalidParam(ReportingError):
    """Parámetro inválido o faltante."""

class BadDateRange(ReportingError):
    """date_from > date_to u otro rango inválido."""

class SchemaMismatch(ReportingError):
    """El export del document store no cumple el esquema esperado."""

class InvalidTransition(ReportingError):
    """Cambio de estado no permitido en una solicitud de adelanto."""
