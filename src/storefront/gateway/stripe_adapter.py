"""Stripe payment gateway adapter.

Backed by Stripe PaymentIntents: the client secret goes back to the browser,
which confirms the card payment directly with Stripe; the server later reads
the intent status to decide whether the order is paid.
"""

import stripe
import structlog

from storefront.gateway.port import ChargeIntent, GatewayError, PaymentGateway

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        receipt_email: str | None,
        description: str,
    ) -> ChargeIntent:
        params = {
            "amount": amount,
            "currency": currency.lower(),
            "metadata": metadata,
            "description": description,
        }
        if receipt_email:
            params["receipt_email"] = receipt_email

        try:
            intent = stripe.PaymentIntent.create(api_key=self.api_key, **params)
        except stripe.StripeError as exc:
            logger.error("stripe_intent_create_failed", error=str(exc), code=exc.code)
            raise GatewayError(exc.user_message or str(exc), gateway_code=exc.code) from exc

        return self._to_intent(intent)

    def retrieve_intent(self, intent_id: str) -> ChargeIntent:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            logger.error("stripe_intent_retrieve_failed", intent_id=intent_id, error=str(exc), code=exc.code)
            raise GatewayError(exc.user_message or str(exc), gateway_code=exc.code) from exc

        return self._to_intent(intent)

    @staticmethod
    def _to_intent(intent) -> ChargeIntent:
        return ChargeIntent(
            intent_id=intent["id"],
            client_secret=intent["client_secret"],
            status=intent["status"],
            amount=intent["amount"],
            currency=intent["currency"],
            metadata=dict(intent.get("metadata") or {}),
        )
