# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/__init__.py

Schemas y tipos de valor del módulo Payments.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .payment_event_schemas import PaymentEvent, normalize_email
from .ledger_schemas import (
    LEDGER_SLOT_COUNT,
    PaymentSlot,
    EMPTY_SLOT,
    LedgerRecord,
    PaymentSlotOut,
    LedgerRecordOut,
)
from .pending_payment_schemas import PendingPaymentRecord
from .reconciliation_schemas import ReconciliationOutcome
from .repair_schemas import (
    LedgerRepairRequest,
    RepairPaymentOut,
    LedgerRepairReport,
)

__all__ = [
    "PaymentEvent",
    "normalize_email",
    "LEDGER_SLOT_COUNT",
    "PaymentSlot",
    "EMPTY_SLOT",
    "LedgerRecord",
    "PaymentSlotOut",
    "LedgerRecordOut",
    "PendingPaymentRecord",
    "ReconciliationOutcome",
    "LedgerRepairRequest",
    "RepairPaymentOut",
    "LedgerRepairReport",
]

# Fin del archivo app/modules/payments/schemas/__init__.py
