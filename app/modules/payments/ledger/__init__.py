# -*- coding: utf-8 -*-
"""
app/modules/payments/ledger/__init__.py

Lógica pura del ledger de alumnos (slots, agregados, duplicados,
significancia).

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .slots import (
    LEDGER_SLOT_COUNT,
    LedgerTotals,
    assign_slot,
    recompute_totals,
    fill_slot,
)
from .significance import is_significant
from .duplicate_guard import find_slot_with_payment, is_duplicate

__all__ = [
    "LEDGER_SLOT_COUNT",
    "LedgerTotals",
    "assign_slot",
    "recompute_totals",
    "fill_slot",
    "is_significant",
    "find_slot_with_payment",
    "is_duplicate",
]

# Fin del archivo app/modules/payments/ledger/__init__.py
