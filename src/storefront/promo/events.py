"""Domain events for the Promo aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Promo")
class PromoIssued:
    """A voucher was generated for a gift-card purchase that is not yet paid."""

    promo_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    giftcard_id = Identifier(required=True)
    promo_code = String(required=True)
    promo_price = Float(required=True)
    currency = String(required=True)
    issued_at = DateTime(required=True)


@storefront.event(part_of="Promo")
class PromoPaid:
    """The gift-card purchase settled; the voucher can be delivered."""

    promo_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    promo_code = String(required=True)
    promo_price = Float(required=True)
    currency = String(required=True)
    email_to = String(required=True)
    transaction_id = String(required=True)
    paid_at = DateTime(required=True)
