# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/verify.py

Fachada de verificación de firmas para webhooks de Razorpay.

Autor: CourseLedger
Fecha: 2026-10-12
"""
from __future__ import annotations

from typing import Dict, Optional

from app.modules.payments.services.webhooks.signature_verification import (
    RAZORPAY_SIGNATURE_HEADER,
    verify_razorpay_signature as _verify_razorpay,
)
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings


def _get_header(headers: Dict[str, str], name: str) -> Optional[str]:
    name_lower = name.lower()
    for key, value in headers.items():
        if key.lower() == name_lower:
            return value
    return None


def verify_razorpay_signature(
    raw_body: bytes,
    headers: Dict[str, str],
    # Inyección de dependencias para testing
    settings: Optional[PaymentsSettings] = None,
) -> bool:
    """
    Verifica la firma de un webhook de Razorpay.

    Args:
        raw_body: Body crudo del request
        headers: Headers del request (X-Razorpay-Signature)
        settings: Configuración de pagos (opcional, para testing)

    Returns:
        True si la firma es válida (o no hay secreto configurado)
    """
    if settings is None:
        settings = get_payments_settings()

    return _verify_razorpay(
        payload=raw_body,
        signature_header=_get_header(headers, RAZORPAY_SIGNATURE_HEADER),
        webhook_secret=settings.webhook_secret_value(),
    )


__all__ = ["verify_razorpay_signature"]

# Fin del archivo app/modules/payments/facades/webhooks/verify.py
