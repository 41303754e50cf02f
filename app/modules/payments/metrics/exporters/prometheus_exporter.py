# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para webhooks y conciliación del ledger.
Registro dedicado (no el global de prometheus_client) para que los
tests puedan leer contadores sin interferencias.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

WEBHOOKS_RECEIVED_TOTAL = Counter(
    "ledger_webhook_received_total",
    "Total webhooks de Razorpay recibidos por tipo de evento",
    ["event"],
    registry=registry,
)

WEBHOOKS_REJECTED_TOTAL = Counter(
    "ledger_webhook_rejected_total",
    "Total webhooks rechazados antes de conciliar",
    ["reason"],  # reason: invalid_signature/invalid_payload/missing_reference_id/store_unavailable
    registry=registry,
)

RECONCILE_OUTCOME_TOTAL = Counter(
    "ledger_reconcile_outcome_total",
    "Resultados del motor de conciliación",
    ["outcome", "reason"],
    registry=registry,
)

WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "ledger_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    registry=registry,
)


# --------------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------------

def render_prometheus_metrics() -> bytes:
    """
    Genera la salida actual de las métricas en formato Prometheus.
    """
    return generate_latest(registry)


def observe_webhook_received(event: str):
    """Registra recepción de un webhook."""
    WEBHOOKS_RECEIVED_TOTAL.labels(event=event or "unknown").inc()


def observe_webhook_rejected(reason: str, duration: float | None = None):
    WEBHOOKS_REJECTED_TOTAL.labels(reason=reason).inc()
    if duration is not None:
        WEBHOOKS_PROCESSING_SECONDS.observe(duration)


def observe_reconcile_outcome(outcome: str, reason: str | None, duration: float | None = None):
    RECONCILE_OUTCOME_TOTAL.labels(outcome=outcome, reason=reason or "none").inc()
    if duration is not None:
        WEBHOOKS_PROCESSING_SECONDS.observe(duration)
    logger.debug(f"[Prometheus] reconcile outcome={outcome} reason={reason}")


def get_sample_value(sample_name: str, **labels) -> float:
    """Valor actual de una muestra del registro (0.0 si no existe)."""
    value = registry.get_sample_value(sample_name, labels)
    return value or 0.0


def prometheus_ping() -> dict:
    """Devuelve un simple dict para verificar salud del exporter."""
    return {
        "status": "ok",
        "service": "ledger-metrics",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

# Fin del archivo app/modules/payments/metrics/exporters/prometheus_exporter.py
