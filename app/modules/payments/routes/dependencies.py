# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/dependencies.py

Dependencias FastAPI compartidas por las rutas de pagos.

Los tests las sustituyen con app.dependency_overrides (store en memoria,
notifier falso) sin tocar la base de datos.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.shared.database.database import get_async_session
from app.modules.payments.repositories.ledger_store_sqlalchemy import SqlAlchemyLedgerStore
from app.modules.payments.services.ledger_store import LedgerStore
from app.modules.payments.services.notification_service import (
    ConfirmationNotifier,
    build_confirmation_notifier,
)


def get_settings_dep() -> PaymentsSettings:
    return get_payments_settings()


async def get_ledger_store(
    session: AsyncSession = Depends(get_async_session),
) -> LedgerStore:
    return SqlAlchemyLedgerStore(session)


def get_confirmation_notifier(
    settings: PaymentsSettings = Depends(get_settings_dep),
) -> Optional[ConfirmationNotifier]:
    return build_confirmation_notifier(settings)


__all__ = [
    "get_settings_dep",
    "get_ledger_store",
    "get_confirmation_notifier",
]

# Fin del archivo app/modules/payments/routes/dependencies.py
