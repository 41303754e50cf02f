# -*- coding: utf-8 -*-
"""
app/modules/payments/services/__init__.py

Servicios del módulo Payments:
- ReconciliationService: aplica eventos de pago al ledger
- LedgerRepairService: reconstrucción administrativa del ledger
- notification_service: confirmación de pago al alumno
- ledger_store: contrato LedgerStore y locks por email

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .ledger_store import (
    LedgerStore,
    LedgerStoreError,
    LedgerStoreUnavailableError,
    LedgerConflictError,
    EmailLockRegistry,
    get_email_lock_registry,
)
from .notification_service import (
    PaymentConfirmation,
    ConfirmationNotifier,
    build_confirmation_notifier,
)
from .reconciliation_service import ReconciliationService
from .ledger_repair_service import (
    LedgerRepairService,
    LedgerRepairError,
    NoSuccessfulPaymentsError,
    NoSignificantPaymentsError,
    LedgerRecordNotFoundError,
)

__all__ = [
    "LedgerStore",
    "LedgerStoreError",
    "LedgerStoreUnavailableError",
    "LedgerConflictError",
    "EmailLockRegistry",
    "get_email_lock_registry",
    "PaymentConfirmation",
    "ConfirmationNotifier",
    "build_confirmation_notifier",
    "ReconciliationService",
    "LedgerRepairService",
    "LedgerRepairError",
    "NoSuccessfulPaymentsError",
    "NoSignificantPaymentsError",
    "LedgerRecordNotFoundError",
]

# Fin del archivo app/modules/payments/services/__init__.py
