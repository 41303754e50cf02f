# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/__init__.py

Exporta las funciones clave de facades/webhooks.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .normalize import (
    RazorpayNotification,
    WebhookNormalizationError,
    MissingReferenceIdError,
    normalize_webhook_payload,
    build_payment_event,
)
from .verify import verify_razorpay_signature
from .handler import (
    WebhookSignatureError,
    WebhookProcessingError,
    WebhookResult,
    parse_verified_webhook,
    reconcile_notification,
    handle_webhook,
)

__all__ = [
    "RazorpayNotification",
    "WebhookNormalizationError",
    "MissingReferenceIdError",
    "normalize_webhook_payload",
    "build_payment_event",
    "verify_razorpay_signature",
    "WebhookSignatureError",
    "WebhookProcessingError",
    "WebhookResult",
    "parse_verified_webhook",
    "reconcile_notification",
    "handle_webhook",
]

# Fin del archivo app/modules/payments/facades/webhooks/__init__.py
