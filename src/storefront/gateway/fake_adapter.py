"""Configurable fake payment gateway for development and testing.

Intents live in memory. Each new intent starts with `initial_status`
(``requires_payment_method`` by default, like a real card intent before the
client confirms it); tests move it along with `settle()`.
"""

from uuid import uuid4

from storefront.gateway.port import SUCCEEDED, ChargeIntent, GatewayError, PaymentGateway


class FakeGateway(PaymentGateway):
    """In-memory payment gateway."""

    def __init__(self) -> None:
        self.initial_status: str = "requires_payment_method"
        self.should_fail: bool = False
        self.failure_reason: str = "Gateway unavailable"
        self.intents: dict[str, ChargeIntent] = {}
        self.calls: list[dict] = []

    def configure(
        self,
        initial_status: str = "requires_payment_method",
        should_fail: bool = False,
        failure_reason: str = "Gateway unavailable",
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.initial_status = initial_status
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        receipt_email: str | None,
        description: str,
    ) -> ChargeIntent:
        self.calls.append(
            {
                "method": "create_intent",
                "amount": amount,
                "currency": currency,
                "metadata": dict(metadata),
                "receipt_email": receipt_email,
                "description": description,
            }
        )
        if self.should_fail:
            raise GatewayError(self.failure_reason, gateway_code="fake_failure")

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = ChargeIntent(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            status=self.initial_status,
            amount=amount,
            currency=currency.lower(),
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_intent(self, intent_id: str) -> ChargeIntent:
        self.calls.append({"method": "retrieve_intent", "intent_id": intent_id})
        if self.should_fail:
            raise GatewayError(self.failure_reason, gateway_code="fake_failure")
        try:
            return self.intents[intent_id]
        except KeyError:
            raise GatewayError(f"No such payment_intent: '{intent_id}'", gateway_code="resource_missing") from None

    def settle(self, intent_id: str, status: str = SUCCEEDED) -> ChargeIntent:
        """Move an intent to `status`, as the client-side confirmation would."""
        intent = self.intents[intent_id]
        settled = ChargeIntent(
            intent_id=intent.intent_id,
            client_secret=intent.client_secret,
            status=status,
            amount=intent.amount,
            currency=intent.currency,
            metadata=intent.metadata,
        )
        self.intents[intent_id] = settled
        return settled
