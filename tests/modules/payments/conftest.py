# tests/modules/payments/conftest.py
# -*- coding: utf-8 -*-
"""
Fixtures del módulo payments.

InMemoryLedgerStore implementa el protocolo LedgerStore sobre un
InMemoryLedgerDatabase compartido: cada store es una unidad de trabajo
(escrituras en staging hasta commit), lock(email) se mantiene hasta
commit/rollback como un advisory lock transaccional, y se pueden
inyectar latencia, fallos o un "insert concurrente" antes de crear.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Set

import pytest

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.schemas.ledger_schemas import LedgerRecord
from app.modules.payments.schemas.payment_event_schemas import PaymentEvent, normalize_email
from app.modules.payments.schemas.pending_payment_schemas import PendingPaymentRecord
from app.modules.payments.services.ledger_store import (
    EmailLockRegistry,
    LedgerConflictError,
    LedgerStoreUnavailableError,
)
from app.modules.payments.services.notification_service import PaymentConfirmation
from app.shared.config.settings_payments import PaymentsSettings


# -----------------------------------------------------------------------------
# Fakes
# -----------------------------------------------------------------------------
class InMemoryLedgerDatabase:
    """Estado "persistido" compartido entre stores."""

    def __init__(self) -> None:
        self.records: Dict[str, LedgerRecord] = {}
        self.pending: Dict[str, PendingPaymentRecord] = {}
        self.commits = 0
        self.rollbacks = 0
        self._next_id = 1
        self._locks: Dict[str, asyncio.Lock] = {}

    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def lock_for(self, email: str) -> asyncio.Lock:
        return self._locks.setdefault(email, asyncio.Lock())

    def seed_record(self, record: LedgerRecord) -> LedgerRecord:
        if record.id is None:
            record = record.with_changes(id=self.next_id())
        self.records[record.email] = record
        return record

    def seed_pending(self, pending: PendingPaymentRecord) -> PendingPaymentRecord:
        self.pending[pending.reference_id] = pending
        return pending


class InMemoryLedgerStore:
    def __init__(
        self,
        db: InMemoryLedgerDatabase,
        *,
        latency: Optional[Dict[str, float]] = None,
        fail_on: Optional[Set[str]] = None,
        before_insert: Optional[Callable[[LedgerRecord], None]] = None,
    ) -> None:
        self.db = db
        self.latency = latency or {}
        self.fail_on = fail_on or set()
        self.before_insert = before_insert
        self.calls: List[str] = []
        self._staged_records: Dict[str, LedgerRecord] = {}
        self._staged_pending: Dict[str, PendingPaymentRecord] = {}
        self._held: List[asyncio.Lock] = []

    async def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        delay = self.latency.get(operation)
        if delay:
            await asyncio.sleep(delay)
        if operation in self.fail_on:
            raise LedgerStoreUnavailableError(f"{operation}: injected failure")

    async def get_by_email(self, email: str) -> Optional[LedgerRecord]:
        await self._enter("get_by_email")
        email = normalize_email(email)
        if email in self._staged_records:
            return self._staged_records[email]
        return self.db.records.get(email)

    async def upsert(self, record: LedgerRecord) -> LedgerRecord:
        await self._enter("upsert")
        if record.id is None:
            if self.before_insert is not None:
                hook, self.before_insert = self.before_insert, None
                hook(record)
            if record.email in self.db.records or record.email in self._staged_records:
                raise LedgerConflictError(f"duplicate email {record.email}")
            record = record.with_changes(id=self.db.next_id())
        self._staged_records[record.email] = record
        return record

    async def get_pending_payment(self, reference_id: str) -> Optional[PendingPaymentRecord]:
        await self._enter("get_pending_payment")
        return self._staged_pending.get(reference_id) or self.db.pending.get(reference_id)

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
        await self._enter("update_pending_payment")
        current = self._staged_pending.get(reference_id) or self.db.pending.get(reference_id)
        if current is None:
            return False
        if not current.payment_status.can_transition_to(status):
            return True
        changes: Dict[str, Any] = {
            "payment_status": status,
            "failure_reason": failure_reason,
        }
        if gateway_payment_id is not None:
            changes["gateway_payment_id"] = gateway_payment_id
        if order_id is not None:
            changes["order_id"] = order_id
        if payment_method is not None:
            changes["payment_method"] = payment_method
        self._staged_pending[reference_id] = replace(current, **changes)
        return True

    async def list_successful_payments(self, email: str) -> List[PendingPaymentRecord]:
        await self._enter("list_successful_payments")
        email = normalize_email(email)
        payments = [
            p for p in self.db.pending.values()
            if normalize_email(p.email) == email and p.payment_status == PaymentEventStatus.SUCCESS
        ]
        return sorted(payments, key=lambda p: (p.payment_date is None, p.payment_date or date.min))

    @asynccontextmanager
    async def lock(self, email: str):
        await self._enter("lock")
        lock = self.db.lock_for(normalize_email(email))
        await lock.acquire()
        self._held.append(lock)
        yield

    async def commit(self) -> None:
        await self._enter("commit")
        self.db.records.update(self._staged_records)
        self.db.pending.update(self._staged_pending)
        self.db.commits += 1
        self._reset()

    async def rollback(self) -> None:
        self.calls.append("rollback")
        self.db.rollbacks += 1
        self._reset()

    def _reset(self) -> None:
        self._staged_records.clear()
        self._staged_pending.clear()
        while self._held:
            self._held.pop().release()


class RecordingNotifier:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: List[PaymentConfirmation] = []

    async def send_payment_confirmation(self, confirmation: PaymentConfirmation) -> None:
        self.sent.append(confirmation)
        if self.fail:
            raise RuntimeError("smtp down")


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def ledger_db() -> InMemoryLedgerDatabase:
    return InMemoryLedgerDatabase()


@pytest.fixture
def make_store(ledger_db):
    def _make(**kwargs) -> InMemoryLedgerStore:
        return InMemoryLedgerStore(ledger_db, **kwargs)
    return _make


@pytest.fixture
def store(make_store) -> InMemoryLedgerStore:
    return make_store()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(fail=True)


@pytest.fixture
def lock_registry() -> EmailLockRegistry:
    return EmailLockRegistry()


@pytest.fixture
def payments_settings() -> PaymentsSettings:
    return PaymentsSettings(
        razorpay_webhook_secret=None,
        ledger_store_timeout_seconds=0.5,
        payment_confirmation_url=None,
    )


@pytest.fixture
def make_event():
    """Fábrica de PaymentEvent con valores por defecto razonables."""
    counter = {"n": 0}

    def _make(**overrides) -> PaymentEvent:
        counter["n"] += 1
        n = counter["n"]
        data: Dict[str, Any] = {
            "gateway_payment_id": f"pay_{n:04d}",
            "reference_id": f"ref_{n:04d}",
            "status": PaymentEventStatus.SUCCESS,
            "amount": Decimal("2999"),
            "currency": "INR",
            "email": "a@x.com",
            "name": "Asha",
            "mobile": "9999999999",
            "course_name": "Data Science",
            "payment_date": date(2026, 1, n if n <= 28 else 28),
        }
        data.update(overrides)
        return PaymentEvent(**data)

    return _make


@pytest.fixture
def make_pending():
    def _make(reference_id: str, **overrides) -> PendingPaymentRecord:
        data: Dict[str, Any] = {
            "reference_id": reference_id,
            "email": "a@x.com",
            "course": "Data Science",
            "amount": Decimal("2999"),
            "currency": "INR",
            "payment_status": PaymentEventStatus.PENDING,
            "name": "Asha",
            "mobile": "9999999999",
        }
        data.update(overrides)
        return PendingPaymentRecord(**data)

    return _make
