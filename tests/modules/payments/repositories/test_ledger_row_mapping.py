# -*- coding: utf-8 -*-
"""
Mapeo filas <-> snapshots del ledger:
- student_master_table (payment_{n}_*) <-> LedgerRecord.slots
- payments <-> PendingPaymentRecord
"""
from datetime import date
from decimal import Decimal

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.models.pending_payment_models import PendingPayment
from app.modules.payments.models.student_ledger_models import StudentLedger
from app.modules.payments.repositories.pending_payment_repository import row_to_pending_record
from app.modules.payments.repositories.student_ledger_repository import (
    record_to_values,
    row_to_record,
)
from app.modules.payments.schemas.ledger_schemas import EMPTY_SLOT, LedgerRecord, PaymentSlot


def _row() -> StudentLedger:
    return StudentLedger(
        id=7,
        email="a@x.com",
        student_name="Asha",
        mobile="9999999999",
        current_course_name="Data Science",
        payment_1_amount=Decimal("2999.00"),
        payment_1_date=date(2026, 1, 1),
        payment_1_gateway_id="pay_1",
        payment_2_amount=Decimal("4999.00"),
        payment_2_date=date(2026, 2, 1),
        payment_2_gateway_id="pay_2",
        total_amount_paid=Decimal("7998.00"),
        total_payments_count=2,
        enrollment_date=date(2026, 1, 1),
        last_payment_date=date(2026, 2, 1),
    )


def test_row_to_record_maps_slot_columns_in_order():
    record = row_to_record(_row())

    assert record.id == 7
    assert record.email == "a@x.com"
    assert record.slot(1) == PaymentSlot(Decimal("2999.00"), date(2026, 1, 1), "pay_1")
    assert record.slot(2).gateway_payment_id == "pay_2"
    assert record.slot(3) == EMPTY_SLOT
    assert record.slot(4) == EMPTY_SLOT
    assert record.total_payments_count == 2


def test_record_to_values_covers_every_slot_column():
    record = LedgerRecord(
        email="a@x.com",
        slots=(
            PaymentSlot(Decimal("2999"), date(2026, 1, 1), "pay_1"),
            EMPTY_SLOT,
            EMPTY_SLOT,
            PaymentSlot(Decimal("100"), date(2026, 4, 1), "pay_4"),
        ),
        total_amount_paid=Decimal("3099"),
        total_payments_count=2,
    )

    values = record_to_values(record)

    assert "id" not in values
    assert values["payment_1_gateway_id"] == "pay_1"
    assert values["payment_2_amount"] is None
    assert values["payment_4_date"] == date(2026, 4, 1)
    assert values["total_amount_paid"] == Decimal("3099")
    for index in range(1, 5):
        for suffix in ("amount", "date", "gateway_id"):
            assert f"payment_{index}_{suffix}" in values


def test_record_to_values_matches_model_columns():
    columns = set(StudentLedger.__table__.columns.keys())
    values = record_to_values(LedgerRecord(email="a@x.com"))
    assert set(values) <= columns


def test_row_to_pending_record_normalizes_currency_and_status():
    row = PendingPayment(
        id="ref_1",
        email="a@x.com",
        course="Data Science",
        amount=Decimal("99.99"),
        currency="usd",
        payment_status="success",
        razorpay_payment_id="pay_1",
        razorpay_order_id="order_1",
        payment_date=date(2026, 1, 5),
    )

    pending = row_to_pending_record(row)

    assert pending.reference_id == "ref_1"
    assert pending.currency == "USD"
    assert pending.payment_status == PaymentEventStatus.SUCCESS
    assert pending.gateway_payment_id == "pay_1"
    assert pending.order_id == "order_1"


def test_row_to_pending_record_defaults_missing_amount():
    row = PendingPayment(
        id="ref_2",
        email="a@x.com",
        amount=None,
        currency="INR",
        payment_status="pending",
    )
    assert row_to_pending_record(row).amount == Decimal("0")
