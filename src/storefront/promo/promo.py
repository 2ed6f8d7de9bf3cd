"""Promo aggregate (CQRS) — a gift-card voucher bought through the payment gateway.

A promo is issued unpaid with a generated voucher code and the gift card's
price, and is flagged paid once the gateway reports its charge intent as
succeeded.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String

from storefront.domain import storefront
from storefront.promo.events import PromoIssued, PromoPaid


@storefront.aggregate
class Promo:
    customer_id = Identifier(required=True)
    giftcard_id = Identifier(required=True)
    promo_code = String(required=True, max_length=100, unique=True)
    promo_price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="INR")
    email_to = String(required=True, max_length=254)
    transaction_id = String(max_length=255, unique=True)
    paid = Boolean(default=False)
    created_at = DateTime()
    paid_at = DateTime()

    @classmethod
    def issue(cls, customer_id, giftcard_id, promo_code, promo_price, currency, email_to):
        now = datetime.now(UTC)
        promo = cls(
            customer_id=customer_id,
            giftcard_id=giftcard_id,
            promo_code=promo_code,
            promo_price=promo_price,
            currency=currency,
            email_to=email_to,
            paid=False,
            created_at=now,
        )
        promo.raise_(
            PromoIssued(
                promo_id=str(promo.id),
                customer_id=str(customer_id),
                giftcard_id=str(giftcard_id),
                promo_code=promo_code,
                promo_price=promo_price,
                currency=currency,
                issued_at=now,
            )
        )
        return promo

    def attach_transaction(self, transaction_id):
        if self.paid:
            raise ValidationError({"paid": ["A transaction cannot be attached to a paid promo"]})
        self.transaction_id = transaction_id

    def mark_paid(self):
        if self.paid:
            raise ValidationError({"paid": ["Promo is already paid"]})
        if not self.transaction_id:
            raise ValidationError({"transaction_id": ["Promo has no transaction to settle"]})

        now = datetime.now(UTC)
        self.paid = True
        self.paid_at = now
        self.raise_(
            PromoPaid(
                promo_id=str(self.id),
                customer_id=str(self.customer_id),
                promo_code=self.promo_code,
                promo_price=self.promo_price,
                currency=self.currency,
                email_to=self.email_to,
                transaction_id=self.transaction_id,
                paid_at=now,
            )
        )

    def matches(self, search: str) -> bool:
        needle = search.lower()
        return any(needle in value.lower() for value in (self.promo_code, self.email_to) if value)


@storefront.repository(part_of=Promo)
class PromoRepository:
    def find_by_transaction_id(self, transaction_id: str) -> Promo:
        return self._dao.find_by(transaction_id=transaction_id)

    def code_exists(self, promo_code: str) -> bool:
        return bool(self._dao.query.filter(promo_code=promo_code).all().items)

    def find_for_customer(self, customer_id: str, search: str | None = None) -> list[Promo]:
        promos = self._dao.query.filter(customer_id=customer_id).order_by("-created_at").all().items
        if search:
            promos = [promo for promo in promos if promo.matches(search)]
        return promos

    def get_for_customer(self, promo_id: str, customer_id: str) -> Promo:
        promo = self.get(promo_id)
        if str(promo.customer_id) != str(customer_id):
            raise ObjectNotFoundError({"_entity": f"`Promo` object with identifier {promo_id} does not exist."})
        return promo
