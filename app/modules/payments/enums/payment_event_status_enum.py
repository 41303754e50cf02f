# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/payment_event_status_enum.py

Estado normalizado de una notificación de pago y del registro
pendiente en la tabla payments.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from enum import StrEnum


class PaymentEventStatus(StrEnum):
    """Estado del intento de pago."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    def can_transition_to(self, new: "PaymentEventStatus") -> bool:
        """SUCCESS es terminal: un evento tardío (pending / failed) no lo revierte."""
        return self is not PaymentEventStatus.SUCCESS or new is PaymentEventStatus.SUCCESS


__all__ = ["PaymentEventStatus"]

# Fin del archivo app/modules/payments/enums/payment_event_status_enum.py
