# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/pending_payment_schemas.py

Snapshot del registro de la tabla payments que se crea antes de
redirigir al alumno a la pasarela.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from app.modules.payments.enums import PaymentEventStatus


@dataclass(frozen=True)
class PendingPaymentRecord:
    reference_id: str
    email: str
    course: Optional[str]
    amount: Decimal
    currency: str
    payment_status: PaymentEventStatus
    name: Optional[str] = None
    mobile: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    order_id: Optional[str] = None
    payment_method: Optional[str] = None
    failure_reason: Optional[str] = None
    payment_date: Optional[date] = None
    referred_by_email: Optional[str] = None


__all__ = ["PendingPaymentRecord"]

# Fin del archivo app/modules/payments/schemas/pending_payment_schemas.py
