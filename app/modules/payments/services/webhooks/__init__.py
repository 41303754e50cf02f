# -*- coding: utf-8 -*-
"""
app/modules/payments/services/webhooks/__init__.py

Servicios de bajo nivel para webhooks de pasarela.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .signature_verification import (
    RAZORPAY_SIGNATURE_HEADER,
    compute_razorpay_signature,
    verify_razorpay_signature,
)

__all__ = [
    "RAZORPAY_SIGNATURE_HEADER",
    "compute_razorpay_signature",
    "verify_razorpay_signature",
]

# Fin del archivo app/modules/payments/services/webhooks/__init__.py
