# -*- coding: utf-8 -*-
"""
app/shared/config/settings_payments.py

Configuración de pagos y del ledger de alumnos.

Descripción:
    Centraliza el secreto del webhook de Razorpay, los umbrales de pago
    significativo, el curso de renovación, timeouts del store y la
    notificación de confirmación.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos y ledger."""

    # =========================================================================
    # RAZORPAY
    # =========================================================================

    razorpay_webhook_secret: Optional[SecretStr] = Field(
        default=None,
        description="Secreto compartido del webhook (HMAC-SHA256). Si está vacío no se verifica firma."
    )

    # =========================================================================
    # LEDGER
    # =========================================================================

    ledger_significant_usd_min: Decimal = Field(
        default=Decimal("100"),
        description="Monto mínimo en USD para que un pago afecte el ledger"
    )

    ledger_significant_other_min: Decimal = Field(
        default=Decimal("2000"),
        description="Monto mínimo en cualquier otra moneda (INR, etc.)"
    )

    ledger_renewal_course_name: str = Field(
        default="Renewal Fee (Existing Student Only)",
        description="Nombre de curso que identifica un pago de renovación"
    )

    ledger_store_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout de la espera del lock por email y de cada operación del store"
    )

    # =========================================================================
    # NOTIFICACIONES
    # =========================================================================

    send_payment_confirmation_email: bool = Field(
        default=True,
        description="Enviar confirmación al aplicar un pago al ledger"
    )

    payment_confirmation_url: Optional[str] = Field(
        default=None,
        description="Endpoint HTTP que dispara el email de confirmación (vacío = solo log)"
    )

    payment_confirmation_token: Optional[SecretStr] = Field(
        default=None,
        description="Bearer token para el endpoint de confirmación"
    )

    payment_confirmation_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout de la llamada de confirmación"
    )

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def webhook_secret_value(self) -> Optional[str]:
        """Secreto en claro o None si no está configurado."""
        if self.razorpay_webhook_secret is None:
            return None
        value = self.razorpay_webhook_secret.get_secret_value().strip()
        return value or None


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


def reset_payments_settings() -> None:
    """Descarta el singleton (útil para tests que cambian variables de entorno)."""
    global _payments_settings
    _payments_settings = None


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "reset_payments_settings",
]
# Fin del archivo app/shared/config/settings_payments.py
