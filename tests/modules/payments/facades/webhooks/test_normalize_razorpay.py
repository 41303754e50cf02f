# -*- coding: utf-8 -*-
"""
Suite: normalización de webhooks de Razorpay

- normalize_webhook_payload: JSON crudo -> RazorpayNotification
- build_payment_event: notificación + pago pendiente -> PaymentEvent
"""
import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from app.modules.payments.enums import PaymentEventStatus
from app.modules.payments.facades.webhooks import (
    MissingReferenceIdError,
    WebhookNormalizationError,
    build_payment_event,
    normalize_webhook_payload,
)


def razorpay_body(event="payment.captured", **entity_overrides):
    entity = {
        "id": "pay_ABC",
        "order_id": "order_XYZ",
        "status": "captured",
        "method": "upi",
        "amount": 299900,
        "currency": "INR",
        "email": "asha@example.com",
        "contact": "+919999999999",
        "created_at": int(datetime(2026, 2, 3, 10, 0, tzinfo=timezone.utc).timestamp()),
        "notes": {
            "reference_id": "ref_1",
            "course": "Data Science",
            "email": "asha@example.com",
            "mobile": "9999999999",
        },
    }
    entity.update(entity_overrides)
    return json.dumps({"event": event, "payload": {"payment": {"entity": entity}}}).encode()


def test_normalize_captured_payment():
    n = normalize_webhook_payload(razorpay_body())
    assert n.event == "payment.captured"
    assert n.status == PaymentEventStatus.SUCCESS
    assert n.gateway_payment_id == "pay_ABC"
    assert n.order_id == "order_XYZ"
    assert n.amount == Decimal("2999")
    assert n.reference_id == "ref_1"
    assert n.notes_course == "Data Science"


def test_failed_and_other_events_map_status():
    assert normalize_webhook_payload(razorpay_body("payment.failed")).status == PaymentEventStatus.FAILED
    assert normalize_webhook_payload(razorpay_body("payment.authorized")).status == PaymentEventStatus.PENDING


def test_minor_units_keep_decimals():
    n = normalize_webhook_payload(razorpay_body(amount=10050, currency="USD"))
    assert n.amount == Decimal("100.50")


@pytest.mark.parametrize(
    "raw",
    [
        b"not-json",
        b"[1, 2]",
        json.dumps({"event": "payment.captured"}).encode(),
        json.dumps({"payload": {"payment": {"entity": {"id": "pay_1"}}}}).encode(),
    ],
)
def test_invalid_payloads(raw):
    with pytest.raises(WebhookNormalizationError):
        normalize_webhook_payload(raw)


def test_missing_payment_id():
    with pytest.raises(WebhookNormalizationError):
        normalize_webhook_payload(razorpay_body(id=""))


def test_missing_reference_id():
    with pytest.raises(MissingReferenceIdError, match="No reference ID"):
        normalize_webhook_payload(razorpay_body(notes={"course": "Data Science"}))


def test_empty_notes_list_means_no_reference():
    with pytest.raises(MissingReferenceIdError):
        normalize_webhook_payload(razorpay_body(notes=[]))


def test_event_from_payload_without_pending():
    event = build_payment_event(normalize_webhook_payload(razorpay_body()))
    assert event.email == "asha@example.com"
    assert event.course_name == "Data Science"
    assert event.amount == Decimal("2999")
    assert event.currency == "INR"
    assert event.payment_date == date(2026, 2, 3)
    assert event.mobile == "9999999999"
    assert event.failure_reason is None
    assert event.payment_method == "upi"


def test_event_prefers_pending_payment(make_pending):
    pending = make_pending(
        "ref_1",
        email="Other@Example.com",
        name="Asha K",
        course="Machine Learning",
        amount=Decimal("3500"),
        payment_date=date(2026, 2, 1),
        referred_by_email="friend@x.com",
    )
    event = build_payment_event(normalize_webhook_payload(razorpay_body()), pending)
    assert event.email == "other@example.com"
    assert event.name == "Asha K"
    assert event.course_name == "Machine Learning"
    assert event.amount == Decimal("3500")
    assert event.payment_date == date(2026, 2, 1)
    assert event.referred_by_email == "friend@x.com"


def test_failed_event_carries_failure_reason():
    body = razorpay_body("payment.failed", error_description="Card declined by bank")
    event = build_payment_event(normalize_webhook_payload(body))
    assert event.status == PaymentEventStatus.FAILED
    assert event.failure_reason == "Card declined by bank"


def test_failed_event_default_failure_reason():
    event = build_payment_event(normalize_webhook_payload(razorpay_body("payment.failed")))
    assert event.failure_reason == "Payment failed"


def test_payment_date_falls_back_to_today():
    body = razorpay_body(created_at=None)
    event = build_payment_event(normalize_webhook_payload(body), today=date(2026, 3, 3))
    assert event.payment_date == date(2026, 3, 3)


def test_incomplete_event_data_is_rejected():
    body = razorpay_body(email=None, notes={"reference_id": "ref_1"})
    with pytest.raises(WebhookNormalizationError):
        build_payment_event(normalize_webhook_payload(body))
