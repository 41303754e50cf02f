# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/__init__.py

Ensamblador de rutas del módulo Payments.

Incluye:
- /payments/webhooks/razorpay
- /payments/ledger/{email}
- /payments/ledger/repair
- /payments/metrics/*

Autor: CourseLedger
Fecha: 2026-10-12
"""

from fastapi import APIRouter

from .webhooks_razorpay import router as webhooks_razorpay_router
from .ledger_admin import router as ledger_admin_router
from ..metrics.routes import router as metrics_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(webhooks_razorpay_router, prefix="/payments")
router.include_router(ledger_admin_router, prefix="/payments")
router.include_router(metrics_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/__init__.py
