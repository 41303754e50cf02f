# -*- coding: utf-8 -*-
"""
app/modules/payments/services/notification_service.py

Confirmación de pago al alumno tras aplicar un pago al ledger.

Soporta dos modos:
- console: solo loguea (desarrollo/tests o URL no configurada)
- http: POST JSON al endpoint que envía el correo de confirmación

La notificación es best-effort: notify_payment_confirmation nunca
propaga errores al motor de conciliación.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol, TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from app.shared.config.settings_payments import PaymentsSettings

logger = logging.getLogger(__name__)


class NotificationError(RuntimeError):
    """El endpoint de confirmación rechazó o no respondió la solicitud."""
    pass


@dataclass(frozen=True)
class PaymentConfirmation:
    email: str
    name: Optional[str]
    course: str
    amount: Decimal
    currency: str
    payment_id: str

    def as_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["amount"] = str(self.amount)
        return payload


class ConfirmationNotifier(Protocol):
    async def send_payment_confirmation(self, confirmation: PaymentConfirmation) -> None: ...


class ConsoleConfirmationNotifier:
    """No envía nada; solo deja constancia en logs."""

    async def send_payment_confirmation(self, confirmation: PaymentConfirmation) -> None:
        logger.info(
            "[CONSOLE CONFIRMATION] %s → %s | %s %s | payment_id=%s",
            confirmation.course,
            confirmation.email,
            confirmation.amount,
            confirmation.currency,
            confirmation.payment_id,
        )


class HttpConfirmationNotifier:
    """POST de la confirmación a un endpoint interno (bearer token)."""

    def __init__(
        self,
        url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not url:
            raise ValueError("PAYMENT_CONFIRMATION_URL es requerido")
        self.url = url.strip()
        self.token = token
        self.timeout = timeout
        self._transport = transport

    async def send_payment_confirmation(self, confirmation: PaymentConfirmation) -> None:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.url,
                    json=confirmation.as_payload(),
                    headers=headers,
                )
            except httpx.TimeoutException as e:
                raise NotificationError(f"Confirmation timeout: {e}") from e
            except httpx.RequestError as e:
                raise NotificationError(f"Confirmation request error: {e}") from e

        if response.is_success:
            logger.info(
                "[CONFIRMATION] sent ok: to=%s payment_id=%s status=%d",
                confirmation.email,
                confirmation.payment_id,
                response.status_code,
            )
            return

        raise NotificationError(
            f"Confirmation endpoint error: {response.status_code} - {response.text[:200]}"
        )


def build_confirmation_notifier(settings: "PaymentsSettings") -> Optional[ConfirmationNotifier]:
    """Notifier según settings; None si las confirmaciones están deshabilitadas."""
    if not settings.send_payment_confirmation_email:
        return None
    if not settings.payment_confirmation_url:
        return ConsoleConfirmationNotifier()
    token = (
        settings.payment_confirmation_token.get_secret_value()
        if settings.payment_confirmation_token
        else None
    )
    return HttpConfirmationNotifier(
        settings.payment_confirmation_url,
        token=token,
        timeout=settings.payment_confirmation_timeout_seconds,
    )


async def notify_payment_confirmation(
    notifier: Optional[ConfirmationNotifier],
    confirmation: PaymentConfirmation,
) -> bool:
    """Envía la confirmación; los fallos se loguean y no se propagan."""
    if notifier is None:
        return False
    try:
        await notifier.send_payment_confirmation(confirmation)
        return True
    except Exception:
        logger.exception(
            "[CONFIRMATION] Error enviando confirmación a %s (payment_id=%s)",
            confirmation.email,
            confirmation.payment_id,
        )
        return False


__all__ = [
    "NotificationError",
    "PaymentConfirmation",
    "ConfirmationNotifier",
    "ConsoleConfirmationNotifier",
    "HttpConfirmationNotifier",
    "build_confirmation_notifier",
    "notify_payment_confirmation",
]

# Fin del archivo app/modules/payments/services/notification_service.py
