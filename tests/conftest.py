# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests del backend del ledger.

- PYTHON_ENV=test antes de importar la app (settings_testing, token de
  servicio conocido, sin .env).
- Variables de pagos limpias para que cada test controle su configuración.
- App FastAPI y cliente httpx con ciclo de vida (asgi-lifespan).
"""

import os
from collections.abc import AsyncIterator

import pytest

# -----------------------------------------------------------------------------
# 0) Entorno de pruebas (antes de cualquier import de app.*)
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
for _var in (
    "RAZORPAY_WEBHOOK_SECRET",
    "PAYMENT_CONFIRMATION_URL",
    "PAYMENT_CONFIRMATION_TOKEN",
    "APP_SERVICE_TOKEN",
    "INTERNAL_SERVICE_TOKEN",
):
    os.environ.pop(_var, None)

from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from app.shared.config.config_loader import get_settings
from app.shared.config.settings_payments import reset_payments_settings


@pytest.fixture(autouse=True)
def _reset_settings_singletons():
    """Cada test arranca con settings recién leídos del entorno."""
    get_settings.cache_clear()
    reset_payments_settings()
    yield
    get_settings.cache_clear()
    reset_payments_settings()


@pytest.fixture(scope="session")
def app():
    """Aplicación FastAPI principal (importada después de fijar PYTHON_ENV)."""
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    """
    Cliente HTTP asíncrono contra la app con ASGITransport y gestión de
    startup/shutdown mediante asgi-lifespan.
    """
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    app.dependency_overrides.clear()
