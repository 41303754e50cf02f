# -*- coding: utf-8 -*-
"""
app/modules/payments/services/webhooks/signature_verification.py

Verificación de firmas de webhooks de Razorpay.

Razorpay firma el body crudo con HMAC-SHA256 usando el secreto del
webhook y envía el hex digest en el header X-Razorpay-Signature.

IMPORTANTE:
- Si RAZORPAY_WEBHOOK_SECRET está configurado, la firma es obligatoria.
- Sin secreto configurado no hay verificación (se loguea advertencia).

Autor: CourseLedger
Fecha: 2026-10-12
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

RAZORPAY_SIGNATURE_HEADER = "x-razorpay-signature"


def compute_razorpay_signature(payload: bytes, webhook_secret: str) -> str:
    """hex(HMAC-SHA256(secret, payload))."""
    return hmac.new(
        webhook_secret.encode("utf-8"),
        msg=payload,
        digestmod=hashlib.sha256,
    ).hexdigest()


def verify_razorpay_signature(
    payload: bytes,
    signature_header: Optional[str],
    webhook_secret: Optional[str],
) -> bool:
    """
    Verifica la firma de un webhook de Razorpay.

    Args:
        payload: Body crudo del request
        signature_header: Valor de X-Razorpay-Signature
        webhook_secret: Secreto del webhook (None = verificación deshabilitada)

    Returns:
        True si la firma es válida o no hay secreto configurado
    """
    if not webhook_secret:
        logger.warning(
            "Razorpay webhook sin verificar: RAZORPAY_WEBHOOK_SECRET no configurado"
        )
        return True

    if not signature_header:
        logger.warning("Razorpay webhook rechazado: falta header X-Razorpay-Signature")
        return False

    expected_signature = compute_razorpay_signature(payload, webhook_secret)
    if hmac.compare_digest(expected_signature, signature_header.strip().lower()):
        logger.debug("Razorpay webhook: firma verificada correctamente")
        return True

    logger.warning("Razorpay webhook rechazado: la firma no coincide")
    return False


__all__ = [
    "RAZORPAY_SIGNATURE_HEADER",
    "compute_razorpay_signature",
    "verify_razorpay_signature",
]

# Fin del archivo app/modules/payments/services/webhooks/signature_verification.py
