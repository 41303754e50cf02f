# -*- coding: utf-8 -*-
"""
app/main.py

Punto de entrada principal del backend del ledger de alumnos.

Ajustes clave:
- .env cargado con python-dotenv antes de leer settings.
- Logging configurado desde settings (LOG_LEVEL / LOG_FORMAT).
- Ciclo de vida con cierre ordenado del engine de base de datos.
- Health principal /health y rutas de pagos delegados a app.routes.
- CORS desde settings.get_cors_origins().

Autor: CourseLedger
Fecha: 2026-10-12
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que use os.getenv
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
_override_env = _PYTHON_ENV == "development"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

import anyio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import get_settings
from app.core.logging import setup_logging
from app.core.db import engine

setup_logging()
logger = logging.getLogger(__name__)

logger.info(f"[dotenv] Loaded {_ENV_PATH} (override={_override_env}, PYTHON_ENV={_PYTHON_ENV})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    logger.info(f"🟢 {settings.app_name} iniciado (env={settings.python_env}).")
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        logger.info("🔴 Iniciando shutdown ordenado...")
        with anyio.CancelScope(shield=True):
            await engine.dispose()
        logger.info(f"🔴 {settings.app_name} apagado.")


openapi_tags = [
    {"name": "payments:webhooks", "description": "Webhooks de Razorpay y conciliación del ledger"},
    {"name": "payments:ledger", "description": "Consulta y reparación del registro maestro"},
    {"name": "payments-metrics", "description": "Métricas Prometheus"},
]

app = FastAPI(
    title="CourseLedger API",
    description="Conciliación de pagos y ledger de alumnos",
    version=get_settings().app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)


def _configure_cors(app_instance: FastAPI) -> dict:
    """
    Configura CORS middleware a partir de settings.

    "*" con allow_credentials=True es inválido en navegadores, por eso el
    modo wildcard desactiva credenciales.
    """
    settings = get_settings()
    origins_list = settings.get_cors_origins()
    is_wildcard_only = origins_list == ["*"]

    if settings.is_prod and is_wildcard_only:
        logger.warning("⚠️ CORS WILDCARD IN PRODUCTION: configure CORS_ORIGINS explícitamente")

    cors_config = {
        "allow_origins": origins_list,
        "allow_credentials": not is_wildcard_only,
        "allow_methods": ["*"] if is_wildcard_only else ["GET", "POST", "OPTIONS"],
        "allow_headers": ["*"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    logger.info(f"🌐 CORS origins={origins_list} credentials={cors_config['allow_credentials']}")
    return cors_config


_cors_config = _configure_cors(app)

# Incluye router maestro
from app.routes import router as main_router

app.include_router(main_router)


@app.get("/")
async def root():
    settings = get_settings()
    return {"service": settings.app_name, "status": "active"}


if __name__ == "__main__":
    settings = get_settings()
    enable_reload = settings.is_dev and os.getenv("DISABLE_RELOAD", "").lower() not in ("true", "1", "yes")

    logger.info(f"🔧 Starting server with reload={enable_reload} (env={settings.python_env})")

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=enable_reload,
    )

# Fin del archivo app/main.py
