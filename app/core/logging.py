# -*- coding: utf-8 -*-
"""
app/core/logging.py

Fachada de `app.shared.config.logging_config` bajo `app.core`.
Si no se indican nivel y formato se toman de los settings del entorno.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from typing import Literal, Optional

from app.shared.config.logging_config import setup_logging as _setup_logging

from .settings import get_settings


def setup_logging(
    level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None,
    fmt: Optional[Literal["plain", "pretty", "json"]] = None,
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel de logging; por defecto settings.log_level.
        fmt: Formato de salida; por defecto settings.log_format.
    """
    if level is None or fmt is None:
        settings = get_settings()
        level = level or settings.log_level
        fmt = fmt or settings.log_format
    _setup_logging(level=level, fmt=fmt)

# Fin del archivo app/core/logging.py
