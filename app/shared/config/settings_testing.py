# -*- coding: utf-8 -*-
"""
app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista: logging moderado, base de datos aislada y
token de servicio interno conocido por la suite.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from typing import Literal, Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: Literal["development", "test", "production"] = "test"

    # --- Logging en test: menos ruido ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["json", "pretty", "plain"] = "pretty"

    # --- Base de datos: usar DB separada para pruebas ---
    db_name: str = "courseledger_test"

    internal_service_token: Optional[SecretStr] = SecretStr("test-service-token")

    model_config = SettingsConfigDict(
        env_file=None,
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]

# Fin del archivo app/shared/config/settings_testing.py
