"""Storefront API package."""

from storefront.api.routes import (
    admin_router,
    giftcard_router,
    order_router,
    product_router,
    promo_router,
)

__all__ = ["order_router", "promo_router", "product_router", "giftcard_router", "admin_router"]
