# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/constants.py

Constantes para webhooks de Razorpay.
"""

from decimal import Decimal

# Razorpay events
RAZORPAY_EVENT_CAPTURED = "payment.captured"
RAZORPAY_EVENT_FAILED = "payment.failed"

# Cualquier otro evento se registra como pendiente
RAZORPAY_EVENT_STATUS = {
    RAZORPAY_EVENT_CAPTURED: "success",
    RAZORPAY_EVENT_FAILED: "failed",
}

DEFAULT_FAILURE_REASON = "Payment failed"

# Razorpay envía montos en la unidad menor (paise, cents)
RAZORPAY_MINOR_UNITS = Decimal("100")

__all__ = [
    "RAZORPAY_EVENT_CAPTURED",
    "RAZORPAY_EVENT_FAILED",
    "RAZORPAY_EVENT_STATUS",
    "DEFAULT_FAILURE_REASON",
    "RAZORPAY_MINOR_UNITS",
]
