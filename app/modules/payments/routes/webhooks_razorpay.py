# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/webhooks_razorpay.py

Webhook endpoint para Razorpay.

Endpoint:
- POST /payments/webhooks/razorpay

Mapeo de status HTTP:
- 401 firma inválida
- 400 payload inválido / sin reference_id
- 200 APPLIED o SKIPPED
- 422 ERROR(RENEWAL_WITHOUT_ENROLLMENT), no reintentable
- 503 ERROR(STORE_*) o store no disponible; Razorpay reentrega

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.modules.payments.enums import ErrorReason, OutcomeKind
from app.modules.payments.facades.webhooks import (
    MissingReferenceIdError,
    WebhookNormalizationError,
    WebhookProcessingError,
    WebhookSignatureError,
    parse_verified_webhook,
    reconcile_notification,
)
from app.modules.payments.metrics.exporters.prometheus_exporter import (
    observe_reconcile_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
)
from app.modules.payments.routes.dependencies import (
    get_confirmation_notifier,
    get_ledger_store,
    get_settings_dep,
)
from app.modules.payments.services.ledger_store import LedgerStore
from app.modules.payments.services.notification_service import ConfirmationNotifier
from app.modules.payments.services.reconciliation_service import ReconciliationService
from app.shared.config.settings_payments import PaymentsSettings

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


def build_reconciliation_service(
    store: LedgerStore,
    notifier: Optional[ConfirmationNotifier],
    settings: PaymentsSettings,
) -> ReconciliationService:
    return ReconciliationService(store, settings=settings, notifier=notifier)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def _status_for_outcome(kind: OutcomeKind, reason: Any) -> int:
    if kind != OutcomeKind.ERROR:
        return status.HTTP_200_OK
    if reason == ErrorReason.RENEWAL_WITHOUT_ENROLLMENT:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_503_SERVICE_UNAVAILABLE


@router.post("/razorpay", status_code=status.HTTP_200_OK)
async def razorpay_webhook(
    request: Request,
    store: LedgerStore = Depends(get_ledger_store),
    notifier: Optional[ConfirmationNotifier] = Depends(get_confirmation_notifier),
    settings: PaymentsSettings = Depends(get_settings_dep),
) -> JSONResponse:
    """
    Webhook de Razorpay (payment.captured / payment.failed / otros).
    """
    raw_body = await request.body()
    headers = dict(request.headers)
    start_time = time.time()

    try:
        notification = parse_verified_webhook(raw_body, headers, settings=settings)
    except WebhookSignatureError as e:
        observe_webhook_rejected("invalid_signature", time.time() - start_time)
        return _error(status.HTTP_401_UNAUTHORIZED, str(e))
    except MissingReferenceIdError as e:
        observe_webhook_rejected("missing_reference_id", time.time() - start_time)
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except WebhookNormalizationError as e:
        observe_webhook_rejected("invalid_payload", time.time() - start_time)
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    observe_webhook_received(notification.event)

    service = build_reconciliation_service(store, notifier, settings)
    try:
        result = await reconcile_notification(
            notification,
            store=store,
            reconciliation_service=service,
            settings=settings,
        )
    except WebhookNormalizationError as e:
        observe_webhook_rejected("invalid_payload", time.time() - start_time)
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except WebhookProcessingError as e:
        observe_webhook_rejected("store_unavailable", time.time() - start_time)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))

    outcome = result.outcome
    observe_reconcile_outcome(
        outcome.kind.value,
        outcome.reason.value if outcome.reason is not None else None,
        time.time() - start_time,
    )

    body: Dict[str, Any] = result.as_dict()
    return JSONResponse(
        status_code=_status_for_outcome(outcome.kind, outcome.reason),
        content=body,
    )


# Fin del archivo app/modules/payments/routes/webhooks_razorpay.py
