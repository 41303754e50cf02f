# -*- coding: utf-8 -*-
"""
app/modules/payments/ledger/duplicate_guard.py

Detección de pagos ya registrados en el ledger.

Un gateway_payment_id aparece a lo sumo en un slot. is_duplicate debe
llamarse dentro de la sección crítica por email; fuera de ella la
respuesta puede quedar obsoleta antes de escribir.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from app.modules.payments.schemas.ledger_schemas import LedgerRecord

if TYPE_CHECKING:
    from app.modules.payments.services.ledger_store import LedgerStore


def find_slot_with_payment(
    record: Optional[LedgerRecord], gateway_payment_id: str
) -> Optional[int]:
    """Posición (1-based) del slot que contiene el pago, o None."""
    if record is None:
        return None
    for index, slot in enumerate(record.slots, start=1):
        if slot.gateway_payment_id == gateway_payment_id:
            return index
    return None


async def is_duplicate(store: "LedgerStore", email: str, gateway_payment_id: str) -> bool:
    """True si el registro del email ya tiene el pago en algún slot."""
    record = await store.get_by_email(email)
    return find_slot_with_payment(record, gateway_payment_id) is not None


__all__ = ["find_slot_with_payment", "is_duplicate"]

# Fin del archivo app/modules/payments/ledger/duplicate_guard.py
