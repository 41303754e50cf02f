# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- Currency
- PaymentEventStatus
- OutcomeKind / SkipReason / ErrorReason

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .currency_enum import Currency, normalize_currency_code
from .payment_event_status_enum import PaymentEventStatus
from .reconciliation_enums import OutcomeKind, SkipReason, ErrorReason

__all__ = [
    "Currency",
    "normalize_currency_code",
    "PaymentEventStatus",
    "OutcomeKind",
    "SkipReason",
    "ErrorReason",
]

# Fin del archivo app/modules/payments/enums/__init__.py
