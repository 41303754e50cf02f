# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/__init__.py

Métricas Prometheus de webhooks y conciliación del ledger.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from .exporters.prometheus_exporter import (
    registry,
    observe_webhook_received,
    observe_webhook_rejected,
    observe_reconcile_outcome,
    render_prometheus_metrics,
    get_sample_value,
)

__all__ = [
    "registry",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_reconcile_outcome",
    "render_prometheus_metrics",
    "get_sample_value",
]

# Fin del archivo app/modules/payments/metrics/__init__.py
