# -*- coding: utf-8 -*-
"""
Suite: reparación administrativa del ledger

Reconstrucción de slots desde la tabla payments (solo pagos exitosos y
significativos, orden cronológico, máximo 4) en dry-run y aplicada.
"""
from datetime import date
from decimal import Decimal

import pytest

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.schemas.ledger_schemas import EMPTY_SLOT, LedgerRecord, PaymentSlot
from app.modules.payments.services.ledger_repair_service import (
    LedgerRecordNotFoundError,
    LedgerRepairService,
    NoSignificantPaymentsError,
    NoSuccessfulPaymentsError,
    rebuild_record,
)
from app.modules.payments.services.ledger_store import LedgerStoreUnavailableError

pytestmark = pytest.mark.asyncio


def _paid(make_pending, ref, day, amount="2999", currency="INR", gid=None):
    return make_pending(
        ref,
        amount=Decimal(amount),
        currency=currency,
        payment_status=PaymentEventStatus.SUCCESS,
        payment_date=date(2026, 1, day),
        gateway_payment_id=gid or f"pay_{ref}",
    )


def _broken_record():
    # slot 1 correcto, agregados desincronizados y pago 2 perdido
    return LedgerRecord(
        email="a@x.com",
        current_course_name="Data Science",
        slots=(
            PaymentSlot(amount=Decimal("2999"), date=date(2026, 1, 1), gateway_payment_id="pay_r1"),
            EMPTY_SLOT,
            EMPTY_SLOT,
            EMPTY_SLOT,
        ),
        total_amount_paid=Decimal("9999"),
        total_payments_count=3,
        enrollment_date=date(2026, 1, 1),
        last_payment_date=date(2026, 1, 1),
    )


@pytest.fixture
def service(store, payments_settings, lock_registry):
    return LedgerRepairService(store, settings=payments_settings, lock_registry=lock_registry)


def test_rebuild_record_keeps_course_and_enrollment(make_pending):
    record = _broken_record()
    payments = [_paid(make_pending, "r1", 1), _paid(make_pending, "r2", 10)]

    corrected = rebuild_record(record, payments)

    assert [s.gateway_payment_id for s in corrected.slots] == ["pay_r1", "pay_r2", None, None]
    assert corrected.total_amount_paid == Decimal("5998")
    assert corrected.total_payments_count == 2
    assert corrected.last_payment_date == date(2026, 1, 10)
    assert corrected.current_course_name == "Data Science"
    assert corrected.enrollment_date == date(2026, 1, 1)


def test_rebuild_record_caps_at_four_slots(make_pending):
    payments = [_paid(make_pending, f"r{i}", i) for i in range(1, 7)]
    corrected = rebuild_record(_broken_record(), payments)
    assert corrected.total_payments_count == 4
    assert corrected.last_payment_date == date(2026, 1, 4)


async def test_dry_run_reports_without_writing(ledger_db, service, make_pending):
    seeded = ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(_paid(make_pending, "r1", 1))
    ledger_db.seed_pending(_paid(make_pending, "r2", 5))
    ledger_db.seed_pending(_paid(make_pending, "small", 6, amount="500"))

    report = await service.repair("A@x.com", dry_run=True)

    assert report.email == "a@x.com"
    assert report.dry_run is True
    assert report.changed is True
    assert report.applied is False
    assert report.payments_found == 3
    assert report.significant_payments == 2
    assert report.ignored_payments == 0
    assert report.current.total_amount_paid == Decimal("9999")
    assert report.corrected.total_amount_paid == Decimal("5998")
    assert [p.significant for p in report.payments] == [True, True, False]
    assert ledger_db.records["a@x.com"] == seeded


async def test_apply_persists_corrected_record(ledger_db, service, make_pending):
    ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(_paid(make_pending, "r1", 1))
    ledger_db.seed_pending(_paid(make_pending, "r2", 5))

    report = await service.repair("a@x.com", dry_run=False)

    assert report.applied is True
    record = ledger_db.records["a@x.com"]
    assert record.total_amount_paid == Decimal("5998")
    assert record.total_payments_count == 2
    assert record.slot(2).gateway_payment_id == "pay_r2"
    assert record.last_payment_date == date(2026, 1, 5)


async def test_apply_without_changes_is_noop(ledger_db, service, make_pending):
    ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(_paid(make_pending, "r1", 1))
    first = await service.repair("a@x.com", dry_run=False)
    commits = ledger_db.commits

    second = await service.repair("a@x.com", dry_run=False)

    assert first.applied is True
    assert second.changed is False
    assert second.applied is False
    assert ledger_db.commits == commits


async def test_usd_threshold_used_for_repair(ledger_db, service, make_pending):
    ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(_paid(make_pending, "usd1", 2, amount="99.99", currency="USD"))
    ledger_db.seed_pending(_paid(make_pending, "usd2", 3, amount="100", currency="USD"))

    report = await service.repair("a@x.com")

    assert report.significant_payments == 1
    assert report.corrected.slots[0].gateway_payment_id == "pay_usd2"


async def test_ignored_payments_beyond_four(ledger_db, service, make_pending):
    ledger_db.seed_record(_broken_record())
    for i in range(1, 7):
        ledger_db.seed_pending(_paid(make_pending, f"r{i}", i))

    report = await service.repair("a@x.com")

    assert report.significant_payments == 6
    assert report.ignored_payments == 2


async def test_no_successful_payments(ledger_db, service, make_pending):
    ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(make_pending("pending_only"))
    with pytest.raises(NoSuccessfulPaymentsError):
        await service.repair("a@x.com")


async def test_no_significant_payments(ledger_db, service, make_pending):
    ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(_paid(make_pending, "small", 1, amount="10"))
    with pytest.raises(NoSignificantPaymentsError):
        await service.repair("a@x.com")


async def test_missing_ledger_record(ledger_db, service, make_pending):
    ledger_db.seed_pending(_paid(make_pending, "r1", 1))
    with pytest.raises(LedgerRecordNotFoundError):
        await service.repair("a@x.com")


async def test_store_error_rolls_back_and_propagates(ledger_db, make_store, payments_settings, make_pending):
    ledger_db.seed_record(_broken_record())
    ledger_db.seed_pending(_paid(make_pending, "r1", 1))
    store = make_store(fail_on={"upsert"})
    service = LedgerRepairService(store, settings=payments_settings)

    with pytest.raises(LedgerStoreUnavailableError):
        await service.repair("a@x.com", dry_run=False)

    assert "rollback" in store.calls
    assert ledger_db.records["a@x.com"].total_amount_paid == Decimal("9999")
