# -*- coding: utf-8 -*-
"""
app/shared/internal_auth.py

Autenticación de servicio para los endpoints de administración del ledger
(consulta de registros y reparación).

Uso:
    from app.shared.internal_auth import InternalServiceAuth

    @router.get("/ledger/{email}")
    async def get_ledger(email: str, _auth: InternalServiceAuth): ...

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging
import secrets
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from app.shared.config.config_loader import get_settings

logger = logging.getLogger(__name__)


def _bearer_token(authorization: str) -> str | None:
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def require_internal_service_token(
    authorization: Annotated[str | None, Header()] = None,
) -> bool:
    """
    Valida el header Authorization: Bearer <token> contra
    settings.internal_service_token (APP_SERVICE_TOKEN).

    Raises:
        HTTPException 500: token no configurado en el backend.
        HTTPException 401: header ausente o con formato inválido.
        HTTPException 403: token incorrecto.
    """
    settings = get_settings()

    if not settings.internal_service_token:
        logger.error(
            "internal_service_token_not_configured: "
            "APP_SERVICE_TOKEN must be set for ledger admin endpoints"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal service token not configured",
        )

    if not authorization:
        logger.warning("internal_auth_missing_header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    provided_token = _bearer_token(authorization)
    if provided_token is None:
        logger.warning("internal_auth_invalid_format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization format. Use: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expected_token = settings.internal_service_token.get_secret_value()

    # Comparación en tiempo constante
    if not secrets.compare_digest(provided_token.encode(), expected_token.encode()):
        logger.warning("internal_auth_invalid_token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid service token",
        )

    return True


InternalServiceAuth = Annotated[bool, Depends(require_internal_service_token)]


__all__ = [
    "require_internal_service_token",
    "InternalServiceAuth",
]

# Fin del archivo app/shared/internal_auth.py
