"""Tests for the payment gateway port, adapters and factory."""

import pytest
import stripe

from storefront.gateway import get_gateway, reset_gateway, set_gateway
from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import ChargeIntent, GatewayError
from storefront.gateway.stripe_adapter import StripeGateway


def _create(gateway, amount=20000):
    return gateway.create_intent(
        amount=amount,
        currency="INR",
        metadata={"Order_Id": "OrderId #1"},
        receipt_email="asha@example.com",
        description="Pashudh OrderId #1",
    )


class TestFakeGateway:
    def test_new_intent_requires_payment_method(self):
        intent = _create(FakeGateway())
        assert isinstance(intent, ChargeIntent)
        assert intent.status == "requires_payment_method"
        assert intent.succeeded is False
        assert intent.amount == 20000
        assert intent.currency == "inr"
        assert intent.client_secret.startswith(f"{intent.intent_id}_secret_")

    def test_configured_initial_status(self):
        gateway = FakeGateway()
        gateway.configure(initial_status="succeeded")
        assert _create(gateway).succeeded is True

    def test_settle_changes_retrieved_status(self):
        gateway = FakeGateway()
        intent = _create(gateway)
        gateway.settle(intent.intent_id)
        assert gateway.retrieve_intent(intent.intent_id).succeeded is True

    def test_retrieve_unknown_intent(self):
        with pytest.raises(GatewayError) as exc:
            FakeGateway().retrieve_intent("pi_missing")
        assert exc.value.gateway_code == "resource_missing"

    def test_configured_failure(self):
        gateway = FakeGateway()
        gateway.configure(should_fail=True, failure_reason="Processor down")
        with pytest.raises(GatewayError) as exc:
            _create(gateway)
        assert exc.value.message == "Processor down"

    def test_call_logging(self):
        gateway = FakeGateway()
        intent = _create(gateway, amount=1000)
        gateway.retrieve_intent(intent.intent_id)
        assert [c["method"] for c in gateway.calls] == ["create_intent", "retrieve_intent"]
        assert gateway.calls[0]["amount"] == 1000


class TestGatewayFactory:
    def test_get_gateway_returns_fake_by_default(self, monkeypatch):
        monkeypatch.delenv("PAYMENT_GATEWAY", raising=False)
        reset_gateway()
        assert isinstance(get_gateway(), FakeGateway)

    def test_get_gateway_is_cached(self):
        reset_gateway()
        assert get_gateway() is get_gateway()

    def test_set_gateway_overrides(self):
        custom = FakeGateway()
        set_gateway(custom)
        assert get_gateway() is custom

    def test_stripe_selected_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_GATEWAY", "stripe")
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
        reset_gateway()
        gateway = get_gateway()
        assert isinstance(gateway, StripeGateway)
        assert gateway.api_key == "sk_test_123"

    def test_stripe_requires_secret_key(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_GATEWAY", "stripe")
        monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
        reset_gateway()
        with pytest.raises(ValueError):
            get_gateway()

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_GATEWAY", "carrier-pigeon")
        reset_gateway()
        with pytest.raises(ValueError):
            get_gateway()


def _stripe_intent(status="requires_payment_method"):
    return {
        "id": "pi_123",
        "client_secret": "pi_123_secret_abc",
        "status": status,
        "amount": 20000,
        "currency": "inr",
        "metadata": {"Order_Id": "OrderId #1"},
    }


class TestStripeGateway:
    def test_create_intent_sends_lowercase_currency_and_receipt(self, monkeypatch):
        captured = {}

        def fake_create(**params):
            captured.update(params)
            return _stripe_intent()

        monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

        intent = _create(StripeGateway(api_key="sk_test_123"))

        assert captured["api_key"] == "sk_test_123"
        assert captured["amount"] == 20000
        assert captured["currency"] == "inr"
        assert captured["receipt_email"] == "asha@example.com"
        assert captured["description"] == "Pashudh OrderId #1"
        assert intent.intent_id == "pi_123"
        assert intent.client_secret == "pi_123_secret_abc"

    def test_retrieve_intent_maps_status(self, monkeypatch):
        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", lambda intent_id, api_key: _stripe_intent("succeeded"))
        intent = StripeGateway(api_key="sk_test_123").retrieve_intent("pi_123")
        assert intent.succeeded is True
        assert intent.metadata == {"Order_Id": "OrderId #1"}

    def test_stripe_errors_are_wrapped(self, monkeypatch):
        def failing_create(**params):
            raise stripe.StripeError("Your card was declined.", code="card_declined")

        monkeypatch.setattr(stripe.PaymentIntent, "create", failing_create)

        with pytest.raises(GatewayError) as exc:
            _create(StripeGateway(api_key="sk_test_123"))
        assert exc.value.gateway_code == "card_declined"
        assert "declined" in exc.value.message
