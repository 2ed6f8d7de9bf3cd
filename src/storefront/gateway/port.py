"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
Checkout only needs two calls: create a charge intent for an amount in
minor units, and retrieve an intent later to read its settlement status.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

SUCCEEDED = "succeeded"


class GatewayError(Exception):
    """The payment gateway rejected a request or could not be reached."""

    def __init__(self, message: str, gateway_code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.gateway_code = gateway_code


@dataclass(frozen=True)
class ChargeIntent:
    """A charge authorised by the gateway but not necessarily settled."""

    intent_id: str
    client_secret: str
    status: str
    amount: int
    currency: str
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        receipt_email: str | None,
        description: str,
    ) -> ChargeIntent:
        """Request a charge intent for `amount` minor units."""
        ...

    @abstractmethod
    def retrieve_intent(self, intent_id: str) -> ChargeIntent:
        """Fetch the current state of a previously created intent."""
        ...
