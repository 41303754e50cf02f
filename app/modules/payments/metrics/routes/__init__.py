# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/routes/__init__.py

Router de métricas Prometheus del módulo Payments.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from fastapi import APIRouter

from .routes_prometheus import router_prometheus

router = APIRouter()
router.include_router(router_prometheus, prefix="")

__all__ = [
    "router_prometheus",
    "router",
]

# Fin del archivo app/modules/payments/metrics/routes/__init__.py
