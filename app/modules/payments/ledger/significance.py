# -*- coding: utf-8 -*-
"""
app/modules/payments/ledger/significance.py

Regla de pago significativo: solo estos pagos afectan el ledger.

    (moneda == USD y monto >= umbral_usd) o (moneda != USD y monto >= umbral_otras)

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from decimal import Decimal

from app.modules.payments.enums import Currency

DEFAULT_USD_MIN = Decimal("100")
DEFAULT_OTHER_MIN = Decimal("2000")


def is_significant(
    amount: Decimal,
    currency: str,
    *,
    usd_min: Decimal = DEFAULT_USD_MIN,
    other_min: Decimal = DEFAULT_OTHER_MIN,
) -> bool:
    if currency.upper() == Currency.USD:
        return amount >= usd_min
    return amount >= other_min


__all__ = ["is_significant", "DEFAULT_USD_MIN", "DEFAULT_OTHER_MIN"]

# Fin del archivo app/modules/payments/ledger/significance.py
