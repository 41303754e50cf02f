# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/currency_enum.py

Monedas con las que opera el checkout de cursos.

La pasarela puede reportar otros códigos ISO-4217; solo USD tiene
tratamiento especial (umbral de pago significativo).

Autor: CourseLedger
Fecha: 2026-10-12
"""

from enum import StrEnum


class Currency(StrEnum):
    """Moneda del cobro (código ISO-4217 en mayúsculas)."""

    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    AED = "AED"
    SGD = "SGD"


def normalize_currency_code(value: object) -> str:
    """Devuelve el código de moneda en mayúsculas o lanza ValueError."""
    code = str(value or "").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"Invalid currency code: {value!r}")
    return code


__all__ = ["Currency", "normalize_currency_code"]

# Fin del archivo app/modules/payments/enums/currency_enum.py
