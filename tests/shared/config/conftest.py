# -*- coding: utf-8 -*-
import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_env_and_cache(monkeypatch):
    """
    Aísla variables de entorno y limpia el caché de get_settings() en cada test.
    """
    # Asegura que no heredamos PYTHON_ENV ni secretos del shell del dev
    for k in list(os.environ.keys()):
        if k.startswith(("DB_", "APP_", "CORS_", "LOG_", "RAZORPAY_", "LEDGER_", "PAYMENT_", "SEND_PAYMENT_")):
            monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("PYTHON_ENV", "development")

    from app.shared.config.config_loader import get_settings
    from app.shared.config.settings_payments import reset_payments_settings

    get_settings.cache_clear()
    reset_payments_settings()

    yield

    get_settings.cache_clear()
    reset_payments_settings()
# Fin del archivo tests/shared/config/conftest.py
