from __future__ import annotations
# -*- coding: utf-8 -*-
"""
app/shared/database/database.py

SQLAlchemy + asyncpg contra Postgres (Supabase). NullPool en la app;
el pool lo maneja el pooler de Supabase.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Base (DeclarativeBase con naming convention)
- Dependencia FastAPI: get_async_session
- check_database_health()

Notas:
- Timeouts a nivel de conexión (asyncpg: timeout, command_timeout) para que
  ninguna operación del ledger bloquee indefinidamente.

Autor: CourseLedger
Fecha: 2026-10-12
"""

import asyncio
import logging
import ssl
from typing import AsyncGenerator
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config.config_loader import get_settings
from app.shared.database.base import Base  # reutilizamos la Base única

logger = logging.getLogger(__name__)

settings = get_settings()

DB_ECHO_SQL = bool(settings.db_echo_sql)
DB_TLS_ENABLED = bool(settings.db_tls)
DB_CONNECT_TIMEOUT_S: float = float(settings.db_connect_timeout_s)
DB_COMMAND_TIMEOUT_S: float = float(settings.db_command_timeout_s)


def build_ssl_context() -> ssl.SSLContext:
    """SSLContext con verificación estándar para conexiones TLS a Postgres."""
    ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED
    return ctx


# Genera nombres únicos para prepared statements (evita colisiones en el pooler en transaction mode)
def _prepared_statement_name_func() -> str:
    return f"__asyncpg_{uuid4().hex[:8]}__"


connect_args: dict = {
    "statement_cache_size": 0,
    "prepared_statement_cache_size": 0,
    "prepared_statement_name_func": _prepared_statement_name_func,
    "server_settings": {"search_path": "public"},
    "timeout": DB_CONNECT_TIMEOUT_S,
    "command_timeout": DB_COMMAND_TIMEOUT_S,
}

if DB_TLS_ENABLED:
    connect_args["ssl"] = build_ssl_context()

engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    echo=DB_ECHO_SQL,
    connect_args=connect_args,
)

# ── Session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


# ── Dependencia FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock (incluye advisory locks)
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Args:
        timeout_s: Tiempo máximo de espera en segundos
        sql: Query SQL a ejecutar (default: "SELECT 1")

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (TimeoutError, SQLAlchemyError, OSError) as e:
        logger.warning(f"[DB] Health check fallido: {e}")
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]
# Fin del archivo app/shared/database/database.py
