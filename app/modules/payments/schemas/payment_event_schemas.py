# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/payment_event_schemas.py

Evento de pago normalizado, independiente de la pasarela.

Lo construye la capa de webhooks a partir de la notificación de Razorpay
(y del registro pendiente en payments) y lo consume el motor de
conciliación. Es inmutable: reentregas del mismo pago producen eventos
equivalentes con el mismo gateway_payment_id.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.modules.payments.enums import PaymentEventStatus, normalize_currency_code


def normalize_email(value: str) -> str:
    """Email en minúsculas y sin espacios (clave del ledger)."""
    return (value or "").strip().lower()


class PaymentEvent(BaseModel):
    """Notificación de pago normalizada."""

    model_config = ConfigDict(frozen=True)

    gateway_payment_id: str = Field(
        min_length=1,
        description="ID del pago en la pasarela, estable entre reentregas.",
    )
    reference_id: str = Field(
        min_length=1,
        description="ID del registro pendiente en la tabla payments.",
    )
    status: PaymentEventStatus

    amount: Decimal = Field(ge=0, description="Monto en unidades mayores de la moneda.")
    currency: str = Field(description="Código ISO-4217 en mayúsculas.")

    email: str = Field(min_length=3)
    name: Optional[str] = None
    mobile: Optional[str] = None
    course_name: str = Field(min_length=1)
    payment_date: date

    failure_reason: Optional[str] = Field(
        default=None,
        description="Solo presente cuando status = failed.",
    )

    order_id: Optional[str] = None
    payment_method: Optional[str] = None
    referred_by_email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("currency", mode="before")
    @classmethod
    def _normalize_currency(cls, v: object) -> str:
        return normalize_currency_code(v)

    @model_validator(mode="after")
    def _failure_reason_only_on_failed(self) -> "PaymentEvent":
        if self.failure_reason is not None and self.status != PaymentEventStatus.FAILED:
            raise ValueError("failure_reason is only allowed when status is 'failed'")
        return self


__all__ = ["PaymentEvent", "normalize_email"]

# Fin del archivo app/modules/payments/schemas/payment_event_schemas.py
