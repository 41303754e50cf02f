# -*- coding: utf-8 -*-
import asyncio

import pytest

from app.modules.payments.services.ledger_store import EmailLockRegistry, get_email_lock_registry

pytestmark = pytest.mark.asyncio


async def test_same_email_is_serialized():
    registry = EmailLockRegistry()
    order = []

    async def _worker(name, email):
        async with registry.hold(email):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(_worker("a", "a@x.com"), _worker("b", " A@X.COM "))

    assert order in (
        ["a-in", "a-out", "b-in", "b-out"],
        ["b-in", "b-out", "a-in", "a-out"],
    )


async def test_entries_are_released():
    registry = EmailLockRegistry()
    async with registry.hold("a@x.com"):
        assert len(registry) == 1
    assert len(registry) == 0


async def test_entry_released_on_error():
    registry = EmailLockRegistry()
    with pytest.raises(RuntimeError):
        async with registry.hold("a@x.com"):
            raise RuntimeError("boom")
    assert len(registry) == 0


async def test_hold_timeout_releases_entry():
    registry = EmailLockRegistry()

    async with registry.hold("a@x.com"):
        with pytest.raises(TimeoutError):
            async with registry.hold("a@x.com", timeout=0.01):
                pass
        assert len(registry) == 1

    assert len(registry) == 0


def test_shared_registry_singleton():
    assert get_email_lock_registry() is get_email_lock_registry()
