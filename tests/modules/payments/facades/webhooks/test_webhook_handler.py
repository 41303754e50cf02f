# -*- coding: utf-8 -*-
"""
Suite: handle_webhook (firma -> normalización -> conciliación)
"""
import json
from decimal import Decimal

import pytest

from app.modules.payments.enums import OutcomeKind, PaymentEventStatus
from app.modules.payments.facades.webhooks import (
    WebhookProcessingError,
    WebhookSignatureError,
    handle_webhook,
)
from app.modules.payments.services.reconciliation_service import ReconciliationService
from app.modules.payments.services.webhooks.signature_verification import compute_razorpay_signature
from app.shared.config.settings_payments import PaymentsSettings

pytestmark = pytest.mark.asyncio

SECRET = "whsec_test"


def _body(reference_id="ref_1", event="payment.captured"):
    return json.dumps(
        {
            "event": event,
            "payload": {
                "payment": {
                    "entity": {
                        "id": "pay_H1",
                        "order_id": "order_H1",
                        "amount": 299900,
                        "currency": "INR",
                        "email": "asha@example.com",
                        "notes": {"reference_id": reference_id, "course": "Data Science"},
                    }
                }
            },
        }
    ).encode()


@pytest.fixture
def settings():
    return PaymentsSettings(razorpay_webhook_secret=SECRET, ledger_store_timeout_seconds=0.5)


async def test_signed_webhook_is_reconciled(ledger_db, store, settings, notifier, lock_registry, make_pending):
    ledger_db.seed_pending(make_pending("ref_1", email="asha@example.com"))
    body = _body()
    service = ReconciliationService(store, settings=settings, notifier=notifier, lock_registry=lock_registry)

    result = await handle_webhook(
        raw_body=body,
        headers={"X-Razorpay-Signature": compute_razorpay_signature(body, SECRET)},
        store=store,
        reconciliation_service=service,
        settings=settings,
    )

    assert result.status == "success"
    assert result.reference_id == "ref_1"
    assert result.payment_id == "pay_H1"
    assert result.outcome.kind == OutcomeKind.APPLIED
    assert result.as_dict()["slot"] == 1
    assert ledger_db.records["asha@example.com"].total_amount_paid == Decimal("2999")
    assert ledger_db.pending["ref_1"].payment_status == PaymentEventStatus.SUCCESS


async def test_bad_signature_never_reaches_engine(store, settings):
    class _Engine:
        called = False

        async def reconcile(self, event):
            self.called = True

    engine = _Engine()
    with pytest.raises(WebhookSignatureError):
        await handle_webhook(
            raw_body=_body(),
            headers={"X-Razorpay-Signature": "deadbeef"},
            store=store,
            reconciliation_service=engine,
            settings=settings,
        )
    assert engine.called is False
    assert store.calls == []


async def test_pending_lookup_failure_is_processing_error(make_store, settings, notifier):
    store = make_store(fail_on={"get_pending_payment"})
    body = _body()
    service = ReconciliationService(store, settings=settings, notifier=notifier)

    with pytest.raises(WebhookProcessingError):
        await handle_webhook(
            raw_body=body,
            headers={"x-razorpay-signature": compute_razorpay_signature(body, SECRET)},
            store=store,
            reconciliation_service=service,
            settings=settings,
        )
