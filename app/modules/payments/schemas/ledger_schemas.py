# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/ledger_schemas.py

Tipos de valor del ledger de alumnos.

- PaymentSlot: un pago registrado (monto, fecha, id de pasarela).
- LedgerRecord: snapshot inmutable del registro maestro de un alumno,
  con exactamente LEDGER_SLOT_COUNT slots en orden 1..N.
- LedgerRecordOut: representación para la API administrativa.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import dataclasses
import datetime as dt
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

# Límite de pagos registrados por alumno
LEDGER_SLOT_COUNT = 4


@dataclass(frozen=True)
class PaymentSlot:
    amount: Optional[Decimal] = None
    date: Optional[dt.date] = None
    gateway_payment_id: Optional[str] = None

    @property
    def is_filled(self) -> bool:
        return self.gateway_payment_id is not None


EMPTY_SLOT = PaymentSlot()


def _empty_slots() -> Tuple[PaymentSlot, ...]:
    return (EMPTY_SLOT,) * LEDGER_SLOT_COUNT


@dataclass(frozen=True)
class LedgerRecord:
    """
    Registro maestro de un alumno (uno por email).

    Los agregados (total_amount_paid, total_payments_count) se guardan
    desnormalizados; quien construye un snapshot nuevo los recalcula con
    ledger.slots.recompute_totals.
    """

    email: str
    current_course_name: Optional[str] = None
    slots: Tuple[PaymentSlot, ...] = field(default_factory=_empty_slots)
    total_amount_paid: Decimal = Decimal("0")
    total_payments_count: int = 0
    enrollment_date: Optional[date] = None
    last_payment_date: Optional[date] = None

    id: Optional[int] = None
    student_name: Optional[str] = None
    mobile: Optional[str] = None
    referred_by: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.slots) != LEDGER_SLOT_COUNT:
            raise ValueError(
                f"LedgerRecord requires exactly {LEDGER_SLOT_COUNT} slots, got {len(self.slots)}"
            )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def slot(self, index: int) -> PaymentSlot:
        """Slot por posición 1-based."""
        return self.slots[index - 1]

    def with_changes(self, **changes) -> "LedgerRecord":
        return dataclasses.replace(self, **changes)


class PaymentSlotOut(BaseModel):
    position: int = Field(ge=1, le=LEDGER_SLOT_COUNT)
    amount: Optional[Decimal] = None
    date: Optional[dt.date] = None
    gateway_payment_id: Optional[str] = None


class LedgerRecordOut(BaseModel):
    """Registro maestro expuesto por /payments/ledger/{email}."""

    id: Optional[int] = None
    email: str
    student_name: Optional[str] = None
    mobile: Optional[str] = None
    current_course_name: Optional[str] = None
    referred_by: Optional[str] = None
    slots: List[PaymentSlotOut]
    total_amount_paid: Decimal
    total_payments_count: int = Field(ge=0, le=LEDGER_SLOT_COUNT)
    enrollment_date: Optional[date] = None
    last_payment_date: Optional[date] = None

    @classmethod
    def from_record(cls, record: LedgerRecord) -> "LedgerRecordOut":
        return cls(
            id=record.id,
            email=record.email,
            student_name=record.student_name,
            mobile=record.mobile,
            current_course_name=record.current_course_name,
            referred_by=record.referred_by,
            slots=[
                PaymentSlotOut(
                    position=position,
                    amount=slot.amount,
                    date=slot.date,
                    gateway_payment_id=slot.gateway_payment_id,
                )
                for position, slot in enumerate(record.slots, start=1)
            ],
            total_amount_paid=record.total_amount_paid,
            total_payments_count=record.total_payments_count,
            enrollment_date=record.enrollment_date,
            last_payment_date=record.last_payment_date,
        )


__all__ = [
    "LEDGER_SLOT_COUNT",
    "PaymentSlot",
    "EMPTY_SLOT",
    "LedgerRecord",
    "PaymentSlotOut",
    "LedgerRecordOut",
]

# Fin del archivo app/modules/payments/schemas/ledger_schemas.py
