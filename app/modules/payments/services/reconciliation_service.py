# -*- coding: utf-8 -*-
"""
app/modules/payments/services/reconciliation_service.py

Motor de conciliación: aplica eventos de pago (posiblemente duplicados
o fuera de orden) sobre el ledger de alumnos.

Pasos:
1. Propagar el estado al registro pendiente (payments). Solo SUCCESS
   continúa; el resto termina en SKIPPED(NOT_CAPTURED).
2. Filtrar pagos no significativos -> SKIPPED(NOT_SIGNIFICANT).
3. Sección crítica por email (lock en proceso + lock del store):
   a. Duplicado -> SKIPPED(ALREADY_PROCESSED).
   b. Sin registro: renovación -> ERROR(RENEWAL_WITHOUT_ENROLLMENT);
      si no, se crea con el slot 1. Un conflicto de clave única al
      insertar se resuelve releyendo y siguiendo por la actualización.
   c. Con registro: curso actual (salvo renovación), primer slot libre,
      agregados recalculados. Sin slot libre solo avanza
      last_payment_date (overflow).
   d. Commit.
4. Tras el commit, confirmación al alumno (best-effort).

Los errores del store se convierten en ERROR(STORE_UNAVAILABLE) o
ERROR(STORE_CONFLICT) con rollback de la transacción. El motor no
reintenta; la pasarela reentrega.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Awaitable, Optional, TypeVar

from app.modules.payments.enums import ErrorReason, PaymentEventStatus, SkipReason
from app.modules.payments.ledger.duplicate_guard import find_slot_with_payment, is_duplicate
from app.modules.payments.ledger.significance import is_significant
from app.modules.payments.ledger.slots import assign_slot, fill_slot, recompute_totals
from app.modules.payments.schemas.ledger_schemas import LedgerRecord
from app.modules.payments.schemas.payment_event_schemas import PaymentEvent
from app.modules.payments.schemas.reconciliation_schemas import ReconciliationOutcome
from app.modules.payments.services.ledger_store import (
    EmailLockRegistry,
    LedgerConflictError,
    LedgerStore,
    LedgerStoreError,
    LedgerStoreUnavailableError,
    get_email_lock_registry,
)
from app.modules.payments.services.notification_service import (
    ConfirmationNotifier,
    PaymentConfirmation,
    notify_payment_confirmation,
)
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReconciliationService:
    """
    Aplica PaymentEvent sobre el ledger a través de un LedgerStore.

    Una instancia por unidad de trabajo (el store envuelve una sesión).
    """

    def __init__(
        self,
        store: LedgerStore,
        *,
        settings: Optional[PaymentsSettings] = None,
        notifier: Optional[ConfirmationNotifier] = None,
        lock_registry: Optional[EmailLockRegistry] = None,
    ) -> None:
        settings = settings or get_payments_settings()
        self.store = store
        self.notifier = notifier
        self.locks = lock_registry or get_email_lock_registry()
        self.usd_min = settings.ledger_significant_usd_min
        self.other_min = settings.ledger_significant_other_min
        self.renewal_course_name = settings.ledger_renewal_course_name
        self.store_timeout = settings.ledger_store_timeout_seconds

    # ---------------------------------------------------------
    # API pública
    # ---------------------------------------------------------
    async def reconcile(self, event: PaymentEvent) -> ReconciliationOutcome:
        try:
            outcome = await self._reconcile(event)
        except (LedgerStoreUnavailableError, TimeoutError) as e:
            logger.error(
                f"[RECONCILE] Store no disponible para {event.email} "
                f"(payment={event.gateway_payment_id}): {e!r}"
            )
            await self._rollback_quietly()
            return ReconciliationOutcome.error(ErrorReason.STORE_UNAVAILABLE)
        except LedgerConflictError as e:
            logger.error(
                f"[RECONCILE] Conflicto no resuelto para {event.email} "
                f"(payment={event.gateway_payment_id}): {e}"
            )
            await self._rollback_quietly()
            return ReconciliationOutcome.error(ErrorReason.STORE_CONFLICT)

        if outcome.is_applied:
            await notify_payment_confirmation(
                self.notifier,
                PaymentConfirmation(
                    email=event.email,
                    name=event.name,
                    course=event.course_name,
                    amount=event.amount,
                    currency=event.currency,
                    payment_id=event.gateway_payment_id,
                ),
            )
        return outcome

    # ---------------------------------------------------------
    # Flujo
    # ---------------------------------------------------------
    async def _reconcile(self, event: PaymentEvent) -> ReconciliationOutcome:
        await self._mark_pending_payment(event)

        if event.status != PaymentEventStatus.SUCCESS:
            await self._store_call(self.store.commit())
            logger.info(
                f"[RECONCILE] Evento {event.status} para ref={event.reference_id}; ledger sin cambios"
            )
            return ReconciliationOutcome.skipped(SkipReason.NOT_CAPTURED)

        if not is_significant(
            event.amount,
            event.currency,
            usd_min=self.usd_min,
            other_min=self.other_min,
        ):
            await self._store_call(self.store.commit())
            logger.info(
                f"[RECONCILE] Pago no significativo {event.amount} {event.currency} "
                f"(payment={event.gateway_payment_id}); ledger sin cambios"
            )
            return ReconciliationOutcome.skipped(SkipReason.NOT_SIGNIFICANT)

        async with self.locks.hold(event.email, timeout=self.store_timeout):
            async with AsyncExitStack() as stack:
                async with asyncio.timeout(self.store_timeout):
                    await stack.enter_async_context(self.store.lock(event.email))
                outcome = await self._apply_locked(event)
                await self._store_call(self.store.commit())
        return outcome

    async def _mark_pending_payment(self, event: PaymentEvent) -> None:
        # failure_reason solo viene informado en eventos FAILED
        found = await self._store_call(
            self.store.update_pending_payment(
                event.reference_id,
                event.status,
                event.failure_reason,
                gateway_payment_id=event.gateway_payment_id,
                order_id=event.order_id,
                payment_method=event.payment_method,
            )
        )
        if not found:
            logger.warning(f"[RECONCILE] No existe pago pendiente ref={event.reference_id}")

    async def _apply_locked(self, event: PaymentEvent) -> ReconciliationOutcome:
        email = event.email
        payment_id = event.gateway_payment_id

        if await self._store_call(is_duplicate(self.store, email, payment_id)):
            logger.info(f"[RECONCILE] Pago {payment_id} ya registrado para {email}")
            return ReconciliationOutcome.skipped(SkipReason.ALREADY_PROCESSED)

        is_renewal = event.course_name == self.renewal_course_name
        record = await self._store_call(self.store.get_by_email(email))

        if record is None:
            if is_renewal:
                logger.error(
                    f"[RECONCILE] Renovación sin inscripción previa para {email} "
                    f"(payment={payment_id})"
                )
                return ReconciliationOutcome.error(ErrorReason.RENEWAL_WITHOUT_ENROLLMENT)

            try:
                await self._store_call(self.store.upsert(self._new_record(event)))
                logger.info(f"[RECONCILE] Alumno creado {email} con pago {payment_id} en slot 1")
                return ReconciliationOutcome.applied(1, created=True)
            except LedgerConflictError:
                logger.warning(
                    f"[RECONCILE] Conflicto al crear registro de {email}; continuando como actualización"
                )

            record = await self._store_call(self.store.get_by_email(email))
            if record is None:
                raise LedgerConflictError(f"Ledger record for {email} vanished after conflict")
            if find_slot_with_payment(record, payment_id) is not None:
                logger.info(f"[RECONCILE] Pago {payment_id} ya registrado para {email}")
                return ReconciliationOutcome.skipped(SkipReason.ALREADY_PROCESSED)

        return await self._apply_to_existing(record, event, is_renewal=is_renewal)

    async def _apply_to_existing(
        self,
        record: LedgerRecord,
        event: PaymentEvent,
        *,
        is_renewal: bool,
    ) -> ReconciliationOutcome:
        course_name = record.current_course_name if is_renewal else event.course_name

        slot = assign_slot(record)
        if slot is None:
            logger.warning(
                f"[RECONCILE] Overflow: {record.email} ya tiene todos los slots llenos; "
                f"pago {event.gateway_payment_id} solo actualiza last_payment_date"
            )
            totals = recompute_totals(record.slots)
            updated = record.with_changes(
                current_course_name=course_name,
                last_payment_date=event.payment_date,
                total_amount_paid=totals.total_amount_paid,
                total_payments_count=totals.total_payments_count,
            )
            await self._store_call(self.store.upsert(updated))
            return ReconciliationOutcome.applied(None)

        updated = fill_slot(
            record,
            slot,
            amount=event.amount,
            payment_date=event.payment_date,
            gateway_payment_id=event.gateway_payment_id,
        ).with_changes(
            current_course_name=course_name,
            last_payment_date=event.payment_date,
        )
        await self._store_call(self.store.upsert(updated))
        logger.info(
            f"[RECONCILE] Pago {event.gateway_payment_id} aplicado en slot {slot} para {record.email} "
            f"(total={updated.total_amount_paid}, pagos={updated.total_payments_count})"
        )
        return ReconciliationOutcome.applied(slot)

    def _new_record(self, event: PaymentEvent) -> LedgerRecord:
        record = LedgerRecord(
            email=event.email,
            student_name=event.name,
            mobile=event.mobile or "",
            current_course_name=event.course_name,
            referred_by=event.referred_by_email,
            enrollment_date=event.payment_date,
            last_payment_date=event.payment_date,
        )
        return fill_slot(
            record,
            1,
            amount=event.amount,
            payment_date=event.payment_date,
            gateway_payment_id=event.gateway_payment_id,
        )

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------
    async def _store_call(self, awaitable: Awaitable[T]) -> T:
        async with asyncio.timeout(self.store_timeout):
            return await awaitable

    async def _rollback_quietly(self) -> None:
        try:
            await self._store_call(self.store.rollback())
        except (LedgerStoreError, TimeoutError) as e:
            logger.warning(f"[RECONCILE] Rollback falló: {e!r}")


__all__ = ["ReconciliationService"]

# Fin del archivo app/modules/payments/services/reconciliation_service.py
