# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/student_ledger_repository.py

Repositorio para student_master_table.

Mapea las columnas payment_{n}_* al tuple de PaymentSlot de LedgerRecord
y viceversa. Es el único lugar que conoce los nombres de esas columnas.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.models.student_ledger_models import StudentLedger
from app.modules.payments.schemas.ledger_schemas import (
    LEDGER_SLOT_COUNT,
    LedgerRecord,
    PaymentSlot,
)

logger = logging.getLogger(__name__)


def _slot_columns(index: int) -> tuple[str, str, str]:
    return (
        f"payment_{index}_amount",
        f"payment_{index}_date",
        f"payment_{index}_gateway_id",
    )


def row_to_record(row: StudentLedger) -> LedgerRecord:
    slots = []
    for index in range(1, LEDGER_SLOT_COUNT + 1):
        amount_col, date_col, gateway_col = _slot_columns(index)
        slots.append(
            PaymentSlot(
                amount=getattr(row, amount_col),
                date=getattr(row, date_col),
                gateway_payment_id=getattr(row, gateway_col),
            )
        )
    return LedgerRecord(
        id=row.id,
        email=row.email,
        student_name=row.student_name,
        mobile=row.mobile,
        current_course_name=row.current_course_name,
        referred_by=row.referred_by,
        slots=tuple(slots),
        total_amount_paid=row.total_amount_paid,
        total_payments_count=row.total_payments_count,
        enrollment_date=row.enrollment_date,
        last_payment_date=row.last_payment_date,
    )


def record_to_values(record: LedgerRecord) -> Dict[str, Any]:
    """Columnas (sin id) para insertar/actualizar el registro."""
    values: Dict[str, Any] = {
        "email": record.email,
        "student_name": record.student_name,
        "mobile": record.mobile,
        "current_course_name": record.current_course_name,
        "referred_by": record.referred_by,
        "total_amount_paid": record.total_amount_paid,
        "total_payments_count": record.total_payments_count,
        "enrollment_date": record.enrollment_date,
        "last_payment_date": record.last_payment_date,
    }
    for index, slot in enumerate(record.slots, start=1):
        amount_col, date_col, gateway_col = _slot_columns(index)
        values[amount_col] = slot.amount
        values[date_col] = slot.date
        values[gateway_col] = slot.gateway_payment_id
    return values


class StudentLedgerRepository(BaseRepository[StudentLedger]):
    def __init__(self):
        super().__init__(StudentLedger)

    # -----------------------------------------------------------
    # Lectura (con lock de fila opcional)
    # -----------------------------------------------------------
    async def get_by_email(
        self,
        session: AsyncSession,
        email: str,
        *,
        for_update: bool = False,
    ) -> Optional[StudentLedger]:
        stmt = select(StudentLedger).where(func.lower(StudentLedger.email) == email.lower())
        if for_update:
            stmt = stmt.with_for_update()
        stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    # -----------------------------------------------------------
    # Inserción dentro de SAVEPOINT
    # -----------------------------------------------------------
    async def insert(self, session: AsyncSession, record: LedgerRecord) -> StudentLedger:
        """
        Inserta el registro en un SAVEPOINT.

        Si el email ya existe se propaga IntegrityError y solo se revierte
        el SAVEPOINT; la transacción externa (y sus locks) sigue viva.
        """
        async with session.begin_nested():
            row = await self.create(session, **record_to_values(record))
        return row

    # -----------------------------------------------------------
    # Actualización por id
    # -----------------------------------------------------------
    async def update_from_record(
        self,
        session: AsyncSession,
        row: StudentLedger,
        record: LedgerRecord,
    ) -> StudentLedger:
        for column, value in record_to_values(record).items():
            setattr(row, column, value)
        await session.flush()
        return row


__all__ = [
    "StudentLedgerRepository",
    "row_to_record",
    "record_to_values",
]

# Fin del archivo app/modules/payments/repositories/student_ledger_repository.py
