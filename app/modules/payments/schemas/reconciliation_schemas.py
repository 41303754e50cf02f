# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/reconciliation_schemas.py

Resultado de conciliar un PaymentEvent contra el ledger.

- APPLIED(slot, created): slot es None cuando los cuatro slots ya estaban
  llenos (solo se actualizó last_payment_date).
- SKIPPED(reason): el ledger no cambió.
- ERROR(reason): el evento no pudo aplicarse.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from app.modules.payments.enums import ErrorReason, OutcomeKind, SkipReason


@dataclass(frozen=True)
class ReconciliationOutcome:
    kind: OutcomeKind
    reason: Optional[Union[SkipReason, ErrorReason]] = None
    slot: Optional[int] = None
    created: bool = False

    @classmethod
    def applied(cls, slot: Optional[int], *, created: bool = False) -> "ReconciliationOutcome":
        return cls(kind=OutcomeKind.APPLIED, slot=slot, created=created)

    @classmethod
    def skipped(cls, reason: SkipReason) -> "ReconciliationOutcome":
        return cls(kind=OutcomeKind.SKIPPED, reason=reason)

    @classmethod
    def error(cls, reason: ErrorReason) -> "ReconciliationOutcome":
        return cls(kind=OutcomeKind.ERROR, reason=reason)

    @property
    def is_applied(self) -> bool:
        return self.kind == OutcomeKind.APPLIED

    @property
    def is_error(self) -> bool:
        return self.kind == OutcomeKind.ERROR

    def as_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.kind.value,
            "reason": self.reason.value if self.reason is not None else None,
            "slot": self.slot,
            "created": self.created,
        }


__all__ = ["ReconciliationOutcome"]

# Fin del archivo app/modules/payments/schemas/reconciliation_schemas.py
