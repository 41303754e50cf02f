# -*- coding: utf-8 -*-
"""
app/modules/payments/services/ledger_repair_service.py

Reparación administrativa del ledger de un alumno.

Reconstruye los slots a partir de los pagos exitosos de la tabla payments
(orden cronológico, solo significativos, máximo LEDGER_SLOT_COUNT) y
recalcula agregados y last_payment_date. En dry_run solo devuelve la
comparación actual vs corregido.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from app.modules.payments.ledger.significance import is_significant
from app.modules.payments.ledger.slots import recompute_totals
from app.modules.payments.schemas.ledger_schemas import (
    EMPTY_SLOT,
    LEDGER_SLOT_COUNT,
    LedgerRecord,
    LedgerRecordOut,
    PaymentSlot,
)
from app.modules.payments.schemas.payment_event_schemas import normalize_email
from app.modules.payments.schemas.pending_payment_schemas import PendingPaymentRecord
from app.modules.payments.schemas.repair_schemas import LedgerRepairReport, RepairPaymentOut
from app.modules.payments.services.ledger_store import (
    EmailLockRegistry,
    LedgerStore,
    get_email_lock_registry,
)
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

logger = logging.getLogger(__name__)


class LedgerRepairError(Exception):
    """Error base de la reparación del ledger."""
    pass


class NoSuccessfulPaymentsError(LedgerRepairError):
    pass


class NoSignificantPaymentsError(LedgerRepairError):
    pass


class LedgerRecordNotFoundError(LedgerRepairError):
    pass


def rebuild_record(
    record: LedgerRecord, payments: Sequence[PendingPaymentRecord]
) -> LedgerRecord:
    """
    Registro corregido a partir de pagos ya filtrados y ordenados.

    Solo se usan los primeros LEDGER_SLOT_COUNT; el curso actual y la
    fecha de inscripción no se modifican.
    """
    mapped = list(payments[:LEDGER_SLOT_COUNT])
    slots: List[PaymentSlot] = [
        PaymentSlot(
            amount=payment.amount,
            date=payment.payment_date,
            gateway_payment_id=payment.gateway_payment_id,
        )
        for payment in mapped
    ]
    slots.extend([EMPTY_SLOT] * (LEDGER_SLOT_COUNT - len(slots)))
    totals = recompute_totals(slots)
    return record.with_changes(
        slots=tuple(slots),
        total_amount_paid=totals.total_amount_paid,
        total_payments_count=totals.total_payments_count,
        last_payment_date=mapped[-1].payment_date if mapped else record.last_payment_date,
    )


class LedgerRepairService:
    def __init__(
        self,
        store: LedgerStore,
        *,
        settings: Optional[PaymentsSettings] = None,
        lock_registry: Optional[EmailLockRegistry] = None,
    ) -> None:
        settings = settings or get_payments_settings()
        self.store = store
        self.locks = lock_registry or get_email_lock_registry()
        self.usd_min = settings.ledger_significant_usd_min
        self.other_min = settings.ledger_significant_other_min

    def _is_significant(self, payment: PendingPaymentRecord) -> bool:
        return is_significant(
            payment.amount,
            payment.currency,
            usd_min=self.usd_min,
            other_min=self.other_min,
        )

    async def repair(self, email: str, *, dry_run: bool = True) -> LedgerRepairReport:
        """
        Compara (y opcionalmente corrige) el registro del alumno.

        Raises:
            NoSuccessfulPaymentsError: el email no tiene pagos exitosos.
            NoSignificantPaymentsError: ninguno supera el umbral.
            LedgerRecordNotFoundError: no existe registro maestro.
            LedgerStoreError: fallo del store (se hace rollback).
        """
        email = normalize_email(email)
        async with self.locks.hold(email):
            try:
                async with self.store.lock(email):
                    report = await self._repair_locked(email, dry_run=dry_run)
                    if report.applied:
                        await self.store.commit()
                    else:
                        await self.store.rollback()
            except Exception:
                await self.store.rollback()
                raise
        return report

    async def _repair_locked(self, email: str, *, dry_run: bool) -> LedgerRepairReport:
        payments = await self.store.list_successful_payments(email)
        if not payments:
            raise NoSuccessfulPaymentsError(f"No successful payments found for {email}")

        flagged = [(payment, self._is_significant(payment)) for payment in payments]
        significant = [
            payment for payment, ok in flagged if ok and payment.gateway_payment_id is not None
        ]
        if not significant:
            raise NoSignificantPaymentsError(
                f"No significant payments found for {email} ({len(payments)} successful)"
            )

        current = await self.store.get_by_email(email)
        if current is None:
            raise LedgerRecordNotFoundError(f"No ledger record found for {email}")

        corrected = rebuild_record(current, significant)
        changed = corrected != current
        applied = False

        if changed and not dry_run:
            corrected = await self.store.upsert(corrected)
            applied = True
            logger.info(
                f"[LEDGER_REPAIR] Registro de {email} corregido: "
                f"{current.total_payments_count}→{corrected.total_payments_count} pagos, "
                f"{current.total_amount_paid}→{corrected.total_amount_paid}"
            )
        else:
            logger.info(
                f"[LEDGER_REPAIR] {email}: dry_run={dry_run} changed={changed}"
            )

        return LedgerRepairReport(
            email=email,
            dry_run=dry_run,
            applied=applied,
            changed=changed,
            payments_found=len(payments),
            significant_payments=len(significant),
            ignored_payments=max(len(significant) - LEDGER_SLOT_COUNT, 0),
            payments=[
                RepairPaymentOut(
                    reference_id=payment.reference_id,
                    gateway_payment_id=payment.gateway_payment_id,
                    amount=payment.amount,
                    currency=payment.currency,
                    course=payment.course,
                    payment_date=payment.payment_date,
                    significant=ok,
                )
                for payment, ok in flagged
            ],
            current=LedgerRecordOut.from_record(current),
            corrected=LedgerRecordOut.from_record(corrected),
        )


__all__ = [
    "LedgerRepairService",
    "LedgerRepairError",
    "NoSuccessfulPaymentsError",
    "NoSignificantPaymentsError",
    "LedgerRecordNotFoundError",
    "rebuild_record",
]

# Fin del archivo app/modules/payments/services/ledger_repair_service.py
