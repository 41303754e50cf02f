# -*- coding: utf-8 -*-
"""
app/modules/payments/services/ledger_store.py

Contrato de persistencia del ledger y primitivas de concurrencia.

- LedgerStore: protocolo que implementan el store SQLAlchemy y los
  fakes de tests. Una instancia corresponde a una unidad de trabajo
  (una sesión / transacción).
- LedgerStoreError y subclases: errores que los adapters lanzan y que
  el motor de conciliación convierte en outcomes tipados.
- EmailLockRegistry: un asyncio.Lock por email normalizado para
  serializar la sección crítica dentro del proceso.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncContextManager, AsyncIterator, Dict, List, Optional, Protocol

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.schemas.ledger_schemas import LedgerRecord
from app.modules.payments.schemas.payment_event_schemas import normalize_email
from app.modules.payments.schemas.pending_payment_schemas import PendingPaymentRecord


class LedgerStoreError(Exception):
    """Error base del store del ledger."""
    pass


class LedgerStoreUnavailableError(LedgerStoreError):
    """El backend de persistencia no respondió o rechazó la operación."""
    pass


class LedgerConflictError(LedgerStoreError):
    """Ya existe un registro para el email (violación de la clave única)."""
    pass


class LedgerStore(Protocol):
    async def get_by_email(self, email: str) -> Optional[LedgerRecord]:
        ...

    async def upsert(self, record: LedgerRecord) -> LedgerRecord:
        """
        Inserta (record.id is None) o actualiza por id.

        La inserción lanza LedgerConflictError si el email ya existe;
        el registro existente queda intacto.
        """
        ...

    async def get_pending_payment(self, reference_id: str) -> Optional[PendingPaymentRecord]:
        ...

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
        """
        Devuelve False si no existe el registro pendiente.

        Un registro en SUCCESS no retrocede a PENDING / FAILED: el evento
        tardío se ignora (y se devuelve True).
        """
        ...

    async def list_successful_payments(self, email: str) -> List[PendingPaymentRecord]:
        """Pagos exitosos del email en orden cronológico."""
        ...

    def lock(self, email: str) -> AsyncContextManager[None]:
        """Exclusión mutua por email hasta commit/rollback."""
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...


@dataclass
class _LockEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class EmailLockRegistry:
    """
    Locks por email dentro del proceso.

    Las entradas se eliminan cuando nadie las espera, así el registro no
    crece con cada alumno.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, _LockEntry] = {}

    @asynccontextmanager
    async def hold(self, email: str, timeout: Optional[float] = None) -> AsyncIterator[None]:
        """Exclusión por email; TimeoutError si la espera supera timeout."""
        key = normalize_email(email)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _LockEntry()
        entry.holders += 1
        try:
            async with asyncio.timeout(timeout):
                await entry.lock.acquire()
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            entry.holders -= 1
            if entry.holders == 0:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


# Registro compartido por todos los requests del proceso
_email_locks = EmailLockRegistry()


def get_email_lock_registry() -> EmailLockRegistry:
    return _email_locks


__all__ = [
    "LedgerStore",
    "LedgerStoreError",
    "LedgerStoreUnavailableError",
    "LedgerConflictError",
    "EmailLockRegistry",
    "get_email_lock_registry",
]

# Fin del archivo app/modules/payments/services/ledger_store.py
