# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/handler.py

Entrada unificada para procesar webhooks de Razorpay.

Pasos:
1. Verificar firma (si hay secreto configurado)
2. Normalizar el payload (exige notes.reference_id)
3. Cargar el registro pendiente de payments
4. Construir el PaymentEvent
5. Delegar en ReconciliationService
6. Retornar WebhookResult para la API

La firma se verifica antes de leer el payload; un webhook rechazado
nunca llega al motor.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from app.modules.payments.schemas.reconciliation_schemas import ReconciliationOutcome
from app.modules.payments.services.ledger_store import LedgerStore, LedgerStoreError
from app.modules.payments.services.reconciliation_service import ReconciliationService
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

from .normalize import (
    RazorpayNotification,
    build_payment_event,
    normalize_webhook_payload,
)
from .verify import verify_razorpay_signature

logger = logging.getLogger(__name__)


class WebhookSignatureError(Exception):
    """Error de verificación de firma de webhook."""
    pass


class WebhookProcessingError(Exception):
    """Error durante el procesamiento del webhook (reintentable)."""
    pass


@dataclass(frozen=True)
class WebhookResult:
    status: str
    reference_id: str
    payment_id: str
    outcome: ReconciliationOutcome

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "reference_id": self.reference_id,
            "payment_id": self.payment_id,
            **self.outcome.as_dict(),
        }


def parse_verified_webhook(
    raw_body: bytes,
    headers: Dict[str, str],
    *,
    settings: Optional[PaymentsSettings] = None,
) -> RazorpayNotification:
    """
    Verifica la firma y normaliza el payload.

    Raises:
        WebhookSignatureError: firma ausente o inválida
        WebhookNormalizationError: payload inválido o sin reference_id
    """
    if not verify_razorpay_signature(raw_body, headers, settings=settings):
        raise WebhookSignatureError("Invalid signature")
    return normalize_webhook_payload(raw_body)


async def reconcile_notification(
    notification: RazorpayNotification,
    *,
    store: LedgerStore,
    reconciliation_service: ReconciliationService,
    settings: Optional[PaymentsSettings] = None,
    today: Optional[date] = None,
) -> WebhookResult:
    """
    Construye el PaymentEvent y lo concilia.

    Raises:
        WebhookNormalizationError: faltan datos del alumno / monto
        WebhookProcessingError: el store no respondió al cargar el pago pendiente
    """
    settings = settings or get_payments_settings()

    try:
        async with asyncio.timeout(settings.ledger_store_timeout_seconds):
            pending = await store.get_pending_payment(notification.reference_id)
    except (LedgerStoreError, TimeoutError) as e:
        logger.error(
            f"Error cargando pago pendiente ref={notification.reference_id}: {e!r}"
        )
        raise WebhookProcessingError("Ledger store unavailable") from e

    if pending is None:
        logger.warning(
            f"Webhook Razorpay sin pago pendiente ref={notification.reference_id}; "
            f"usando datos del payload"
        )

    event = build_payment_event(notification, pending, today=today)
    outcome = await reconciliation_service.reconcile(event)

    logger.info(
        f"Webhook Razorpay procesado: event={notification.event} ref={event.reference_id} "
        f"payment={event.gateway_payment_id} outcome={outcome.kind} reason={outcome.reason}"
    )

    return WebhookResult(
        status=event.status.value,
        reference_id=event.reference_id,
        payment_id=event.gateway_payment_id,
        outcome=outcome,
    )


async def handle_webhook(
    *,
    raw_body: bytes,
    headers: Dict[str, str],
    store: LedgerStore,
    reconciliation_service: ReconciliationService,
    settings: Optional[PaymentsSettings] = None,
    today: Optional[date] = None,
) -> WebhookResult:
    """
    Procesa un webhook de Razorpay de punta a punta.

    Raises:
        WebhookSignatureError: firma inválida (401)
        WebhookNormalizationError: payload inválido (400)
        WebhookProcessingError: store no disponible (503)
    """
    notification = parse_verified_webhook(raw_body, headers, settings=settings)
    return await reconcile_notification(
        notification,
        store=store,
        reconciliation_service=reconciliation_service,
        settings=settings,
        today=today,
    )


__all__ = [
    "WebhookSignatureError",
    "WebhookProcessingError",
    "WebhookResult",
    "parse_verified_webhook",
    "reconcile_notification",
    "handle_webhook",
]

# Fin del archivo app/modules/payments/facades/webhooks/handler.py
