# -*- coding: utf-8 -*-
"""
app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from .database import (
    engine,
    SessionLocal,
    get_async_session,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "NAMING_CONVENTION",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo app/shared/database/__init__.py
