"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
across users.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """Tracks a shopper's catalogue entries and the order being checked out."""

    product_slugs: list[str] = field(default_factory=list)
    order_id: str | None = None
    transaction_id: str | None = None


@dataclass
class PromoState:
    giftcard_slug: str | None = None
    promo_id: str | None = None
    transaction_id: str | None = None
