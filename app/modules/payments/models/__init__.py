# -*- coding: utf-8 -*-
"""
app/modules/payments/models/__init__.py

Punto de entrada de modelos ORM del módulo Payments.

Se exportan:
- PendingPayment (tabla payments)
- StudentLedger (tabla student_master_table)

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from .pending_payment_models import PendingPayment
from .student_ledger_models import StudentLedger

__all__ = [
    "PendingPayment",
    "StudentLedger",
]

# Fin del archivo app/modules/payments/models/__init__.py
