# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/ledger_store_sqlalchemy.py

Implementación PostgreSQL (SQLAlchemy async) de LedgerStore.

Una instancia envuelve una AsyncSession y representa una transacción:
- lock(email): pg_advisory_xact_lock con una clave derivada del email;
  se libera al hacer commit o rollback.
- get_by_email: SELECT ... FOR UPDATE sobre la fila del alumno.
- upsert: INSERT en SAVEPOINT (conflicto de email -> LedgerConflictError)
  o UPDATE de la fila ya bloqueada.

Los errores de SQLAlchemy / red se traducen a LedgerStoreUnavailableError.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import hashlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.models.student_ledger_models import StudentLedger
from app.modules.payments.repositories.pending_payment_repository import (
    PendingPaymentRepository,
    row_to_pending_record,
)
from app.modules.payments.repositories.student_ledger_repository import (
    StudentLedgerRepository,
    row_to_record,
)
from app.modules.payments.schemas.ledger_schemas import LedgerRecord
from app.modules.payments.schemas.pending_payment_schemas import PendingPaymentRecord
from app.modules.payments.services.ledger_store import (
    LedgerConflictError,
    LedgerStoreUnavailableError,
)

logger = logging.getLogger(__name__)


def advisory_lock_key(email: str) -> int:
    """Clave bigint estable para pg_advisory_xact_lock."""
    digest = hashlib.sha256(email.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)


@asynccontextmanager
async def _translate_errors(operation: str) -> AsyncIterator[None]:
    try:
        yield
    except IntegrityError as e:
        raise LedgerConflictError(f"{operation}: {e.orig or e}") from e
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"[LEDGER_STORE] {operation} falló: {e}")
        raise LedgerStoreUnavailableError(f"{operation}: {e}") from e


class SqlAlchemyLedgerStore:
    """LedgerStore sobre una AsyncSession."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        ledger_repo: Optional[StudentLedgerRepository] = None,
        pending_repo: Optional[PendingPaymentRepository] = None,
    ) -> None:
        self.session = session
        self.ledger_repo = ledger_repo or StudentLedgerRepository()
        self.pending_repo = pending_repo or PendingPaymentRepository()
        # filas cargadas FOR UPDATE en esta transacción
        self._rows: Dict[int, StudentLedger] = {}

    # ---------------------------------------------------------
    # Ledger
    # ---------------------------------------------------------
    async def get_by_email(self, email: str) -> Optional[LedgerRecord]:
        async with _translate_errors("get_by_email"):
            row = await self.ledger_repo.get_by_email(self.session, email, for_update=True)
        if row is None:
            return None
        self._rows[row.id] = row
        return row_to_record(row)

    async def upsert(self, record: LedgerRecord) -> LedgerRecord:
        if record.id is None:
            async with _translate_errors("insert_ledger"):
                row = await self.ledger_repo.insert(self.session, record)
            self._rows[row.id] = row
            return row_to_record(row)

        async with _translate_errors("update_ledger"):
            row = self._rows.get(record.id)
            if row is None:
                row = await self.ledger_repo.get(self.session, record.id)
            if row is None:
                raise LedgerConflictError(f"Ledger record {record.id} no longer exists")
            await self.ledger_repo.update_from_record(self.session, row, record)
        return row_to_record(row)

    @asynccontextmanager
    async def lock(self, email: str) -> AsyncIterator[None]:
        async with _translate_errors("advisory_lock"):
            await self.session.execute(select(func.pg_advisory_xact_lock(advisory_lock_key(email))))
        yield

    # ---------------------------------------------------------
    # Pagos pendientes
    # ---------------------------------------------------------
    async def get_pending_payment(self, reference_id: str) -> Optional[PendingPaymentRecord]:
        async with _translate_errors("get_pending_payment"):
            row = await self.pending_repo.get(self.session, reference_id)
        return row_to_pending_record(row) if row is not None else None

    async def update_pending_payment(
        self,
        reference_id: str,
        status: PaymentEventStatus,
        failure_reason: Optional[str] = None,
        *,
        gateway_payment_id: Optional[str] = None,
        order_id: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> bool:
        async with _translate_errors("update_pending_payment"):
            row = await self.pending_repo.update_status(
                self.session,
                reference_id,
                status=status,
                failure_reason=failure_reason,
                gateway_payment_id=gateway_payment_id,
                order_id=order_id,
                payment_method=payment_method,
            )
        return row is not None

    async def list_successful_payments(self, email: str) -> List[PendingPaymentRecord]:
        async with _translate_errors("list_successful_payments"):
            rows = await self.pending_repo.list_successful_by_email(self.session, email)
        return [row_to_pending_record(row) for row in rows]

    # ---------------------------------------------------------
    # Transacción
    # ---------------------------------------------------------
    async def commit(self) -> None:
        async with _translate_errors("commit"):
            await self.session.commit()
        self._rows.clear()

    async def rollback(self) -> None:
        self._rows.clear()
        async with _translate_errors("rollback"):
            await self.session.rollback()


__all__ = ["SqlAlchemyLedgerStore", "advisory_lock_key"]

# Fin del archivo app/modules/payments/repositories/ledger_store_sqlalchemy.py
