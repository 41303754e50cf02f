# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/repair_schemas.py

Esquemas del endpoint administrativo de reparación del ledger.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from app.modules.payments.schemas.ledger_schemas import LedgerRecordOut


class LedgerRepairRequest(BaseModel):
    email: str = Field(min_length=3, description="Email del alumno a reparar.")
    dry_run: bool = Field(
        default=True,
        description="Si es true solo se reporta la comparación, sin escribir.",
    )


class RepairPaymentOut(BaseModel):
    """Pago exitoso considerado al reconstruir el registro."""

    reference_id: str
    gateway_payment_id: Optional[str] = None
    amount: Decimal
    currency: str
    course: Optional[str] = None
    payment_date: Optional[date] = None
    significant: bool


class LedgerRepairReport(BaseModel):
    email: str
    dry_run: bool
    applied: bool = Field(description="True si el registro corregido se persistió.")
    changed: bool = Field(description="True si el registro corregido difiere del actual.")
    payments_found: int = Field(ge=0)
    significant_payments: int = Field(ge=0)
    ignored_payments: int = Field(
        ge=0,
        description="Pagos significativos que no caben en los slots disponibles.",
    )
    payments: List[RepairPaymentOut]
    current: LedgerRecordOut
    corrected: LedgerRecordOut


__all__ = [
    "LedgerRepairRequest",
    "RepairPaymentOut",
    "LedgerRepairReport",
]

# Fin del archivo app/modules/payments/schemas/repair_schemas.py
