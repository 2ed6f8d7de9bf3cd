"""Pydantic request/response schemas for the storefront API.

These are external contracts, separate from internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    line1: str
    line2: str | None = None
    city: str
    postal_code: str
    state: str | None = None
    country: str


class CartItemSchema(BaseModel):
    slug: str
    quantity: int = Field(ge=1, default=1)


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    cart_items: list[CartItemSchema] | None = None
    address: AddressSchema
    name: str | None = None
    email: str | None = None
    phone: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart_items": [{"slug": "a2-cow-ghee", "quantity": 2}],
                    "address": {
                        "line1": "12 MG Road",
                        "line2": "Flat 4B",
                        "city": "Bengaluru",
                        "postal_code": "560001",
                        "state": "Karnataka",
                        "country": "India",
                    },
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "phone": "+91 98450 00000",
                }
            ]
        }
    }


class ConfirmPaymentRequest(BaseModel):
    transaction_id: str = Field(min_length=1)


class CheckoutResponse(BaseModel):
    client_secret: str


class OrderCheckoutResponse(CheckoutResponse):
    order_id: str


class OrderLineResponse(BaseModel):
    product_id: str
    slug: str
    name: str
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    items: list[OrderLineResponse]
    total: float
    currency: str
    address: str
    user_name: str | None = None
    user_email: str | None = None
    user_phone: str | None = None
    transaction_id: str | None = None
    status: str
    created_at: datetime | None = None
    paid_at: datetime | None = None


# ---------------------------------------------------------------------------
# Promo Schemas
# ---------------------------------------------------------------------------
class IssuePromoRequest(BaseModel):
    giftcard: str | None = None
    email_to: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"giftcard": "gift-1000", "email_to": "friend@example.com"}]
        }
    }


class PromoCheckoutResponse(CheckoutResponse):
    promo_id: str


class PromoResponse(BaseModel):
    id: str
    giftcard_id: str
    promo_code: str
    promo_price: float
    currency: str
    email_to: str
    transaction_id: str | None = None
    paid: bool
    created_at: datetime | None = None
    paid_at: datetime | None = None


# ---------------------------------------------------------------------------
# Catalogue Schemas
# ---------------------------------------------------------------------------
class CatalogueEntryRequest(BaseModel):
    name: str
    slug: str
    price: float = Field(ge=0)
    description: str | None = None


class CatalogueEntryResponse(BaseModel):
    id: str
    name: str
    slug: str
    price: float
    description: str | None = None


class CatalogueIdResponse(BaseModel):
    id: str


# ---------------------------------------------------------------------------
# Admin Schemas
# ---------------------------------------------------------------------------
class OrderReportResponse(BaseModel):
    order_id: str
    customer_id: str
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    status: str
    total: float | None = None
    currency: str | None = None
    item_count: int = 0
    placed_at: datetime | None = None
    paid_at: datetime | None = None
