# -*- coding: utf-8 -*-
"""
app/modules/payments/ledger/slots.py

Asignación de slots y recálculo de agregados del ledger.

Funciones puras sobre snapshots inmutables:
- assign_slot(record): primer slot libre (1-based) o None si están llenos.
- recompute_totals(slots): suma y conteo sobre los slots llenos.
- fill_slot(record, index, ...): snapshot nuevo con el slot lleno y
  agregados recalculados.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from app.modules.payments.schemas.ledger_schemas import (
    LEDGER_SLOT_COUNT,
    LedgerRecord,
    PaymentSlot,
)


@dataclass(frozen=True)
class LedgerTotals:
    total_amount_paid: Decimal
    total_payments_count: int


def assign_slot(record: LedgerRecord) -> Optional[int]:
    """
    Devuelve la posición (1-based) del primer slot sin gateway_payment_id.

    Un hueco (slot 2 vacío con slot 3 lleno) se rellena en el slot 2.
    """
    for index, slot in enumerate(record.slots, start=1):
        if not slot.is_filled:
            return index
    return None


def recompute_totals(slots: Iterable[PaymentSlot]) -> LedgerTotals:
    """Agregados a partir del conjunto completo de slots."""
    total = Decimal("0")
    count = 0
    for slot in slots:
        if not slot.is_filled:
            continue
        total += slot.amount if slot.amount is not None else Decimal("0")
        count += 1
    return LedgerTotals(total_amount_paid=total, total_payments_count=count)


def fill_slot(
    record: LedgerRecord,
    index: int,
    *,
    amount: Decimal,
    payment_date: date,
    gateway_payment_id: str,
) -> LedgerRecord:
    if not 1 <= index <= LEDGER_SLOT_COUNT:
        raise ValueError(f"Slot index out of range: {index}")
    if record.slot(index).is_filled:
        raise ValueError(f"Slot {index} is already filled")

    slots = list(record.slots)
    slots[index - 1] = PaymentSlot(
        amount=amount,
        date=payment_date,
        gateway_payment_id=gateway_payment_id,
    )
    totals = recompute_totals(slots)
    return record.with_changes(
        slots=tuple(slots),
        total_amount_paid=totals.total_amount_paid,
        total_payments_count=totals.total_payments_count,
    )


__all__ = [
    "LEDGER_SLOT_COUNT",
    "LedgerTotals",
    "assign_slot",
    "recompute_totals",
    "fill_slot",
]

# Fin del archivo app/modules/payments/ledger/slots.py
