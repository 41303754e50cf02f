# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/normalize.py

Normalización de payloads de webhooks de Razorpay.

1. normalize_webhook_payload: JSON crudo -> RazorpayNotification (DTO).
2. build_payment_event: RazorpayNotification + registro pendiente ->
   PaymentEvent. Los datos del alumno y el monto salen del registro
   pendiente cuando existe; si no, de notes / entity.

Autor: CourseLedger
Fecha: 2026-10-12
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.schemas.payment_event_schemas import PaymentEvent
from app.modules.payments.schemas.pending_payment_schemas import PendingPaymentRecord
from .constants import (
    DEFAULT_FAILURE_REASON,
    RAZORPAY_EVENT_STATUS,
    RAZORPAY_MINOR_UNITS,
)

logger = logging.getLogger(__name__)


class RazorpayNotification(BaseModel):
    """
    DTO con los campos de payload.payment.entity que usa el backend.
    """

    event: str = Field(description="Tipo de evento (payment.captured, payment.failed, ...)")
    gateway_payment_id: str = Field(description="entity.id (pay_...)")
    order_id: Optional[str] = None
    entity_status: Optional[str] = None
    method: Optional[str] = None

    amount: Optional[Decimal] = Field(
        default=None,
        description="Monto en unidades mayores (entity.amount / 100)",
    )
    currency: Optional[str] = None

    email: Optional[str] = None
    contact: Optional[str] = None
    created_at: Optional[int] = Field(default=None, description="Epoch de creación del pago")

    # notes
    reference_id: Optional[str] = None
    notes_course: Optional[str] = None
    notes_email: Optional[str] = None
    notes_mobile: Optional[str] = None

    error_code: Optional[str] = None
    error_description: Optional[str] = None

    raw: Dict[str, Any] = Field(default_factory=dict, description="Payload original completo")

    @property
    def status(self) -> PaymentEventStatus:
        return PaymentEventStatus(RAZORPAY_EVENT_STATUS.get(self.event, "pending"))


class WebhookNormalizationError(ValueError):
    """Error al normalizar un webhook."""
    pass


class MissingReferenceIdError(WebhookNormalizationError):
    """El pago no trae notes.reference_id."""
    pass


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _minor_to_major(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value)) / RAZORPAY_MINOR_UNITS
    except (InvalidOperation, ValueError) as e:
        raise WebhookNormalizationError(f"Invalid amount: {value!r}") from e


def normalize_webhook_payload(raw_body: bytes) -> RazorpayNotification:
    """
    Normaliza el payload de Razorpay al DTO interno.

    Raises:
        WebhookNormalizationError: JSON inválido o sin payment entity
        MissingReferenceIdError: falta notes.reference_id
    """
    try:
        data = json.loads(raw_body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Error parseando webhook payload: {e}")
        raise WebhookNormalizationError(f"Invalid JSON payload: {e}")

    if not isinstance(data, dict):
        raise WebhookNormalizationError("Payload must be a JSON object")

    event = data.get("event")
    entity = ((data.get("payload") or {}).get("payment") or {}).get("entity")
    if not isinstance(event, str) or not isinstance(entity, dict):
        raise WebhookNormalizationError(
            "Invalid Razorpay webhook: missing 'event' or 'payload.payment.entity'"
        )

    gateway_payment_id = _clean(entity.get("id"))
    if not gateway_payment_id:
        raise WebhookNormalizationError("Invalid Razorpay webhook: missing payment id")

    notes = entity.get("notes") or {}
    if not isinstance(notes, dict):
        # Razorpay envía [] cuando no hay notes
        notes = {}

    created_at = entity.get("created_at")
    notification = RazorpayNotification(
        event=event,
        gateway_payment_id=gateway_payment_id,
        order_id=_clean(entity.get("order_id")),
        entity_status=_clean(entity.get("status")),
        method=_clean(entity.get("method")),
        amount=_minor_to_major(entity.get("amount")),
        currency=_clean(entity.get("currency")),
        email=_clean(entity.get("email")),
        contact=_clean(entity.get("contact")),
        created_at=created_at if isinstance(created_at, int) else None,
        reference_id=_clean(notes.get("reference_id")),
        notes_course=_clean(notes.get("course")),
        notes_email=_clean(notes.get("email")),
        notes_mobile=_clean(notes.get("mobile")),
        error_code=_clean(entity.get("error_code")),
        error_description=_clean(entity.get("error_description")),
        raw=data,
    )

    logger.debug(
        f"Normalizado evento Razorpay: {event} (payment={gateway_payment_id}, "
        f"ref={notification.reference_id})"
    )

    if not notification.reference_id:
        raise MissingReferenceIdError("No reference ID")
    return notification


def build_payment_event(
    notification: RazorpayNotification,
    pending: Optional[PendingPaymentRecord] = None,
    *,
    today: Optional[date] = None,
) -> PaymentEvent:
    """
    Construye el PaymentEvent inmutable que consume el motor.

    Raises:
        WebhookNormalizationError: faltan datos obligatorios (email, curso,
            monto o moneda) o no son válidos
    """
    status = notification.status

    if pending is not None:
        email = pending.email or notification.notes_email or notification.email
        name = pending.name
        mobile = pending.mobile or notification.notes_mobile or notification.contact
        course = pending.course or notification.notes_course
        amount = pending.amount
        currency = pending.currency or notification.currency
        payment_date = pending.payment_date
        referred_by = pending.referred_by_email
    else:
        email = notification.notes_email or notification.email
        name = None
        mobile = notification.notes_mobile or notification.contact
        course = notification.notes_course
        amount = notification.amount
        currency = notification.currency
        payment_date = None
        referred_by = None

    if payment_date is None and notification.created_at is not None:
        payment_date = datetime.fromtimestamp(notification.created_at, tz=timezone.utc).date()
    if payment_date is None:
        payment_date = today or datetime.now(timezone.utc).date()

    failure_reason = None
    if status == PaymentEventStatus.FAILED:
        failure_reason = notification.error_description or DEFAULT_FAILURE_REASON

    try:
        return PaymentEvent(
            gateway_payment_id=notification.gateway_payment_id,
            reference_id=notification.reference_id,
            status=status,
            amount=amount,
            currency=currency,
            email=email or "",
            name=name,
            mobile=mobile,
            course_name=course or "",
            payment_date=payment_date,
            failure_reason=failure_reason,
            order_id=notification.order_id,
            payment_method=notification.method,
            referred_by_email=referred_by,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        logger.error(
            f"Webhook Razorpay incompleto (ref={notification.reference_id}): {fields}"
        )
        raise WebhookNormalizationError(f"Invalid payment data: {fields}") from e


__all__ = [
    "RazorpayNotification",
    "WebhookNormalizationError",
    "MissingReferenceIdError",
    "normalize_webhook_payload",
    "build_payment_event",
]

# Fin del archivo app/modules/payments/facades/webhooks/normalize.py
