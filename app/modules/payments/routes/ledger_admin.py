# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/ledger_admin.py

Endpoints de administración del ledger de alumnos (token de servicio).

Endpoints:
- GET  /payments/ledger/{email}  → registro maestro actual
- POST /payments/ledger/repair   → reconstrucción desde la tabla payments

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.modules.payments.routes.dependencies import get_ledger_store, get_settings_dep
from app.modules.payments.schemas.ledger_schemas import LedgerRecordOut
from app.modules.payments.schemas.payment_event_schemas import normalize_email
from app.modules.payments.schemas.repair_schemas import LedgerRepairReport, LedgerRepairRequest
from app.modules.payments.services.ledger_repair_service import (
    LedgerRepairError,
    LedgerRepairService,
)
from app.modules.payments.services.ledger_store import LedgerStore, LedgerStoreError
from app.shared.config.settings_payments import PaymentsSettings
from app.shared.internal_auth import InternalServiceAuth

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ledger",
    tags=["payments:ledger"],
)


@router.post("/repair", response_model=LedgerRepairReport)
async def repair_ledger(
    body: LedgerRepairRequest,
    _auth: InternalServiceAuth,
    store: LedgerStore = Depends(get_ledger_store),
    settings: PaymentsSettings = Depends(get_settings_dep),
) -> LedgerRepairReport:
    """
    Reconstruye los slots del alumno a partir de sus pagos exitosos.
    Por defecto dry_run=true: solo devuelve la comparación.
    """
    service = LedgerRepairService(store, settings=settings)
    try:
        return await service.repair(body.email, dry_run=body.dry_run)
    except LedgerRepairError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except LedgerStoreError as e:
        logger.error(f"[LEDGER_REPAIR] Store no disponible para {body.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Ledger store unavailable",
        )


@router.get("/{email}", response_model=LedgerRecordOut)
async def get_ledger_record(
    email: str,
    _auth: InternalServiceAuth,
    store: LedgerStore = Depends(get_ledger_store),
) -> LedgerRecordOut:
    try:
        record = await store.get_by_email(normalize_email(email))
    except LedgerStoreError as e:
        logger.error(f"[LEDGER] Store no disponible consultando {email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Ledger store unavailable",
        )
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No ledger record found for {email}",
        )
    return LedgerRecordOut.from_record(record)


__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/ledger_admin.py
