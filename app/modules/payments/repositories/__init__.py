# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/__init__.py

Punto de entrada de repositorios del módulo Payments.

Incluye:
- StudentLedgerRepository
- PendingPaymentRepository
- SqlAlchemyLedgerStore (LedgerStore sobre AsyncSession)

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .student_ledger_repository import StudentLedgerRepository
from .pending_payment_repository import PendingPaymentRepository
from .ledger_store_sqlalchemy import SqlAlchemyLedgerStore

__all__ = [
    "StudentLedgerRepository",
    "PendingPaymentRepository",
    "SqlAlchemyLedgerStore",
]

# Fin del archivo app/modules/payments/repositories/__init__.py
