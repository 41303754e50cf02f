# -*- coding: utf-8 -*-
"""
app/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async.
Reexpone `app.shared.database.database`:

- engine
- SessionLocal
- Base
- get_async_session
- check_database_health()

Autor: CourseLedger
Fecha: 2026-10-12
"""

from app.shared.database.database import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    check_database_health,
)


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo app/core/db.py
