# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/pending_payment_repository.py

Repositorio para la tabla payments (pagos pendientes / resultados).

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.models.pending_payment_models import PendingPayment
from app.modules.payments.schemas.pending_payment_schemas import PendingPaymentRecord

logger = logging.getLogger(__name__)


def row_to_pending_record(row: PendingPayment) -> PendingPaymentRecord:
    return PendingPaymentRecord(
        reference_id=row.id,
        email=row.email,
        name=row.name,
        mobile=row.mobile,
        course=row.course,
        amount=row.amount if row.amount is not None else Decimal("0"),
        currency=(row.currency or "").upper(),
        payment_status=PaymentEventStatus(row.payment_status),
        gateway_payment_id=row.razorpay_payment_id,
        order_id=row.razorpay_order_id,
        payment_method=row.payment_method,
        failure_reason=row.failure_reason,
        payment_date=row.payment_date,
        referred_by_email=row.referred_by_email,
    )


class PendingPaymentRepository(BaseRepository[PendingPayment]):
    def __init__(self):
        super().__init__(PendingPayment)

    # -----------------------------------------------------------
    # Actualizar resultado del pago
    # -----------------------------------------------------------
    async def update_status(
        self,
        session: AsyncSession,
        reference_id: str,
        *,
        status: PaymentEventStatus,
        failure_reason: Optional[str] = None,
        gateway_payment_id: Optional[str] = None,
        order_id: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> Optional[PendingPayment]:
        row = await self.get(session, reference_id)
        if row is None:
            return None

        current = PaymentEventStatus(row.payment_status)
        if not current.can_transition_to(status):
            logger.info(
                f"[PAYMENTS] ref={reference_id} ya está en {current}; "
                f"se ignora evento tardío {status}"
            )
            return row

        row.payment_status = status.value
        row.failure_reason = failure_reason
        if gateway_payment_id is not None:
            row.razorpay_payment_id = gateway_payment_id
        if order_id is not None:
            row.razorpay_order_id = order_id
        if payment_method is not None:
            row.payment_method = payment_method

        await session.flush()
        return row

    # -----------------------------------------------------------
    # Pagos exitosos de un alumno (orden cronológico)
    # -----------------------------------------------------------
    async def list_successful_by_email(
        self, session: AsyncSession, email: str
    ) -> List[PendingPayment]:
        stmt = (
            select(PendingPayment)
            .where(
                func.lower(PendingPayment.email) == email.lower(),
                PendingPayment.payment_status == PaymentEventStatus.SUCCESS.value,
            )
            .order_by(
                PendingPayment.payment_date.asc().nulls_last(),
                PendingPayment.created_at.asc(),
            )
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


__all__ = ["PendingPaymentRepository", "row_to_pending_record"]

# Fin del archivo app/modules/payments/repositories/pending_payment_repository.py
