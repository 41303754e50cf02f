# -*- coding: utf-8 -*-
"""
Suite: PaymentEvent (evento normalizado, inmutable)
"""
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.schemas import PaymentEvent, normalize_email


def _data(**overrides):
    data = {
        "gateway_payment_id": "pay_1",
        "reference_id": "ref_1",
        "status": "success",
        "amount": "2999",
        "currency": "inr",
        "email": " Asha@Example.COM ",
        "course_name": "Data Science",
        "payment_date": "2026-01-15",
    }
    data.update(overrides)
    return data


def test_event_normalizes_fields():
    event = PaymentEvent(**_data())
    assert event.status is PaymentEventStatus.SUCCESS
    assert event.amount == Decimal("2999")
    assert event.currency == "INR"
    assert event.email == "asha@example.com"
    assert event.payment_date == date(2026, 1, 15)


def test_event_is_frozen():
    event = PaymentEvent(**_data())
    with pytest.raises(ValidationError):
        event.amount = Decimal("1")


def test_failure_reason_only_on_failed():
    with pytest.raises(ValidationError):
        PaymentEvent(**_data(failure_reason="declined"))
    event = PaymentEvent(**_data(status="failed", failure_reason="declined"))
    assert event.failure_reason == "declined"


@pytest.mark.parametrize(
    "field,value",
    [
        ("gateway_payment_id", ""),
        ("course_name", ""),
        ("amount", "-1"),
        ("currency", "rupees"),
        ("status", "captured"),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        PaymentEvent(**_data(**{field: value}))


def test_normalize_email_helper():
    assert normalize_email("  A@X.COM ") == "a@x.com"
    assert normalize_email(None) == ""
# Fin del archivo
