# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/reconciliation_enums.py

Tipos y razones del resultado de conciliar un evento de pago
contra el ledger de alumnos.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from enum import StrEnum


class OutcomeKind(StrEnum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    ERROR = "error"


class SkipReason(StrEnum):
    """Razones por las que un evento no modifica el ledger."""

    NOT_CAPTURED = "not_captured"
    NOT_SIGNIFICANT = "not_significant"
    ALREADY_PROCESSED = "already_processed"


class ErrorReason(StrEnum):
    """Errores de conciliación."""

    RENEWAL_WITHOUT_ENROLLMENT = "renewal_without_enrollment"
    STORE_UNAVAILABLE = "store_unavailable"
    STORE_CONFLICT = "store_conflict"

    @property
    def is_retryable(self) -> bool:
        # la pasarela reintenta la entrega ante errores del store
        return self in (ErrorReason.STORE_UNAVAILABLE, ErrorReason.STORE_CONFLICT)


__all__ = ["OutcomeKind", "SkipReason", "ErrorReason"]

# Fin del archivo app/modules/payments/enums/reconciliation_enums.py
