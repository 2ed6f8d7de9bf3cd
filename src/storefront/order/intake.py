"""Order intake — turn a checked-out cart into a pending order with a charge intent.

Cart lines reference products by slug. Lines whose slug does not resolve are
dropped from the order and from the total; a cart where nothing resolves is
rejected instead of producing a zero-amount charge.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.gateway import get_gateway
from storefront.money import to_minor_units
from storefront.order.order import Order, ShippingAddress
from storefront.settings import store_currency, store_name
from storefront.utils.logging import add_context, get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    cart_items = Text()  # JSON: list of {"slug": ..., "quantity": ...}
    address = Text(required=True)  # JSON: address parts dict
    user_name = String(max_length=255)
    user_email = String(required=True, max_length=254)
    user_phone = String(max_length=30)
    site_url = String(max_length=500)


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


def _quantity(item: dict) -> int:
    quantity = item.get("quantity", 1)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError(
            {"cart_items": [f"Quantity for '{item.get('slug')}' must be a whole number of at least 1"]}
        )
    return quantity


def resolve_cart(cart_items: list[dict]) -> list[dict]:
    """Look up each cart line by slug and snapshot name and price.

    Lines with an unknown slug are skipped. A quantity that is not a whole
    number of at least 1 rejects the whole cart.
    """
    repo = current_domain.repository_for(Product)
    lines = []
    for item in cart_items:
        quantity = _quantity(item)
        product = repo.find_by_slug(item.get("slug") or "")
        if product is None:
            logger.info("cart_item_skipped", slug=item.get("slug"))
            continue
        lines.append(
            {
                "product_id": str(product.id),
                "slug": product.slug,
                "name": product.name,
                "unit_price": product.price,
                "quantity": quantity,
            }
        )
    return lines


def intent_metadata(name, email, phone, site_url, reference) -> dict:
    """Metadata attached to every charge intent so the processor dashboard identifies the purchase."""
    return {
        "Customer_Name": name or "",
        "Customer_Email": email or "",
        "User_Phone": phone or "",
        "Site_Url": site_url or "",
        "Order_Id": reference,
    }


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_items = _load(command.cart_items) if command.cart_items else None
        if not cart_items:
            raise ValidationError({"cart_items": ["Please add cart items to the request body"]})

        address = ShippingAddress(**_load(command.address))
        lines = resolve_cart(cart_items)

        currency = store_currency()
        order = Order.place(
            customer_id=command.customer_id,
            lines=lines,
            address=address.as_text(),
            user_name=command.user_name,
            user_email=command.user_email,
            user_phone=command.user_phone,
            currency=currency,
        )

        intent = get_gateway().create_intent(
            amount=to_minor_units(order.total),
            currency=currency,
            metadata=intent_metadata(
                command.user_name,
                command.user_email,
                command.user_phone,
                command.site_url,
                f"OrderId #{order.id}",
            ),
            receipt_email=command.user_email,
            description=f"{store_name()} OrderId #{order.id}",
        )
        # Later failures in this request, including the commit, log against the intent
        add_context(transaction_id=intent.intent_id, order_id=str(order.id))
        order.attach_transaction(intent.intent_id)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total=order.total,
            transaction_id=intent.intent_id,
            skipped_items=len(cart_items) - len(lines),
        )
        return {"order_id": str(order.id), "client_secret": intent.client_secret}
