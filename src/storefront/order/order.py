"""Order aggregate (CQRS) — a checked-out cart awaiting or holding payment.

State Machine:
    PENDING → PAID

An order is created PENDING with its charge intent's transaction id attached,
and only becomes PAID after the payment gateway reports the intent as
succeeded. Line items snapshot the product name and price at checkout time.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPaid, OrderPlaced


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address as entered at checkout."""

    line1 = String(required=True, max_length=255)
    line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    state = String(max_length=100)
    country = String(required=True, max_length=100)

    def as_text(self) -> str:
        """Single-line form stored on the order: ``line1, line2, city - postal_code, state, country``."""
        parts = [self.line1]
        if self.line2 and self.line2.strip():
            parts.append(self.line2.strip())
        parts.append(f"{self.city} - {self.postal_code}")
        if self.state:
            parts.append(self.state)
        parts.append(self.country)
        return ", ".join(parts)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    """A resolved cart line: which product, at what price, how many."""

    product_id = Identifier(required=True)
    slug = String(required=True, max_length=200)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderLine)
    total = Float(default=0.0, min_value=0.0)
    currency = String(max_length=3, default="INR")
    address = Text(required=True)
    user_name = String(max_length=255)
    user_email = String(max_length=254)
    user_phone = String(max_length=30)
    transaction_id = String(max_length=255, unique=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()
    paid_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, lines, address, user_name, user_email, user_phone, currency):
        """Create a pending order from resolved cart lines.

        Args:
            customer_id: Owner of the order.
            lines: List of dicts with product_id, slug, name, unit_price, quantity.
                Only lines whose product exists in the catalogue are passed in.
            address: Shipping address, already formatted as a single line.
            user_name, user_email, user_phone: Contact details entered at checkout.
            currency: ISO code the total is expressed in.
        """
        if not lines:
            raise ValidationError({"cart_items": ["None of the cart items match a product in the catalogue"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            items=[OrderLine(**line) for line in lines],
            total=sum(line["unit_price"] * line["quantity"] for line in lines),
            currency=currency,
            address=address,
            user_name=user_name,
            user_email=user_email,
            user_phone=user_phone,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                customer_name=user_name,
                customer_email=user_email,
                customer_phone=user_phone,
                total=order.total,
                currency=currency,
                item_count=len(lines),
                placed_at=now,
            )
        )
        return order

    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID.value

    # -------------------------------------------------------------------
    # Payment lifecycle
    # -------------------------------------------------------------------
    def attach_transaction(self, transaction_id):
        """Record the gateway charge intent created for this order."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise ValidationError({"status": ["A transaction can only be attached to a pending order"]})
        self.transaction_id = transaction_id
        self.updated_at = datetime.now(UTC)

    def mark_paid(self):
        """Flip the order to PAID once the gateway reports settlement."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise ValidationError({"status": [f"Cannot mark an order as paid from {self.status}"]})
        if not self.transaction_id:
            raise ValidationError({"transaction_id": ["Order has no transaction to settle"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.paid_at = now
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                customer_name=self.user_name,
                customer_email=self.user_email,
                transaction_id=self.transaction_id,
                total=self.total,
                currency=self.currency,
                paid_at=now,
            )
        )

    def matches(self, search: str) -> bool:
        """Case-insensitive match against the order's searchable text fields."""
        needle = search.lower()
        haystack = (self.address, self.user_name, self.user_email, self.user_phone, self.status, self.transaction_id)
        return any(needle in value.lower() for value in haystack if value)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_transaction_id(self, transaction_id: str) -> Order:
        """Return the order paid through this charge intent. Raises ObjectNotFoundError."""
        return self._dao.find_by(transaction_id=transaction_id)

    def find_for_customer(self, customer_id: str, search: str | None = None) -> list[Order]:
        """Orders owned by a customer, newest first, optionally narrowed by a search term."""
        orders = self._dao.query.filter(customer_id=customer_id).order_by("-created_at").all().items
        if search:
            orders = [order for order in orders if order.matches(search)]
        return orders

    def get_for_customer(self, order_id: str, customer_id: str) -> Order:
        """Load an order only if it belongs to the customer; other owners look like a missing order."""
        order = self.get(order_id)
        if str(order.customer_id) != str(customer_id):
            raise ObjectNotFoundError({"_entity": f"`Order` object with identifier {order_id} does not exist."})
        return order
