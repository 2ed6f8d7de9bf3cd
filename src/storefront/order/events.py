"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A pending order was created from a checked-out cart."""

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String()
    customer_email = String()
    customer_phone = String()
    total = Float(required=True)
    currency = String(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderPaid:
    """The gateway reported the order's charge intent as settled."""

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_name = String()
    customer_email = String()
    transaction_id = String(required=True)
    total = Float(required=True)
    currency = String(required=True)
    paid_at = DateTime(required=True)
