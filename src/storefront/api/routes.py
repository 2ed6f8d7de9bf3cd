"""FastAPI routes for the storefront — orders, promos, catalogue and admin report."""

import json

from fastapi import APIRouter, Depends, Header, Query, Request
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.auth import Customer, current_customer, require_admin
from storefront.api.schemas import (
    CatalogueEntryRequest,
    CatalogueEntryResponse,
    CatalogueIdResponse,
    ConfirmPaymentRequest,
    IssuePromoRequest,
    OrderCheckoutResponse,
    OrderLineResponse,
    OrderReportResponse,
    OrderResponse,
    PlaceOrderRequest,
    PromoCheckoutResponse,
    PromoResponse,
)
from storefront.catalogue.giftcard import Giftcard
from storefront.catalogue.management import AddGiftcard, AddProduct
from storefront.catalogue.product import Product
from storefront.gateway.port import GatewayError
from storefront.locking import TransactionLocks
from storefront.order.confirmation import ConfirmOrderPayment
from storefront.order.intake import PlaceOrder
from storefront.order.order import Order
from storefront.projections.order_report import list_order_reports
from storefront.promo.confirmation import ConfirmPromoPayment
from storefront.promo.issuance import IssuePromo
from storefront.promo.promo import Promo
from storefront.settings import site_url
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


# Routes that call the payment gateway are plain `def` so FastAPI runs them in
# its threadpool, off the event loop.


def transaction_locks(request: Request) -> TransactionLocks:
    """The application's confirmation locks, created on first use."""
    locks = getattr(request.app.state, "transaction_locks", None)
    if locks is None:
        locks = request.app.state.transaction_locks = TransactionLocks()
    return locks


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        items=[
            OrderLineResponse(
                product_id=str(line.product_id),
                slug=line.slug,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in order.items
        ],
        total=order.total,
        currency=order.currency,
        address=order.address,
        user_name=order.user_name,
        user_email=order.user_email,
        user_phone=order.user_phone,
        transaction_id=order.transaction_id,
        status=order.status,
        created_at=order.created_at,
        paid_at=order.paid_at,
    )


def _promo_response(promo: Promo) -> PromoResponse:
    return PromoResponse(
        id=str(promo.id),
        giftcard_id=str(promo.giftcard_id),
        promo_code=promo.promo_code,
        promo_price=promo.promo_price,
        currency=promo.currency,
        email_to=promo.email_to,
        transaction_id=promo.transaction_id,
        paid=promo.paid,
        created_at=promo.created_at,
        paid_at=promo.paid_at,
    )


def _catalogue_response(entry) -> CatalogueEntryResponse:
    return CatalogueEntryResponse(
        id=str(entry.id),
        name=entry.name,
        slug=entry.slug,
        price=entry.price,
        description=entry.description,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    q: str | None = Query(default=None, alias="_q"),
    customer: Customer = Depends(current_customer),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).find_for_customer(customer.id, search=q)
    return [_order_response(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer: Customer = Depends(current_customer)) -> OrderResponse:
    order = current_domain.repository_for(Order).get_for_customer(order_id, customer.id)
    return _order_response(order)


@order_router.post("", status_code=201, response_model=OrderCheckoutResponse)
def place_order(
    body: PlaceOrderRequest,
    customer: Customer = Depends(current_customer),
    origin: str | None = Header(default=None),
) -> OrderCheckoutResponse:
    command = PlaceOrder(
        customer_id=customer.id,
        cart_items=json.dumps([item.model_dump() for item in body.cart_items]) if body.cart_items else None,
        address=json.dumps(body.address.model_dump()),
        user_name=body.name or customer.username,
        user_email=body.email or customer.email,
        user_phone=body.phone or customer.phone,
        site_url=site_url(origin),
    )
    try:
        result = current_domain.process(command, asynchronous=False)
    except (ValidationError, GatewayError):
        raise
    except Exception:
        logger.exception("order_intake_failed", customer_id=customer.id)
        raise
    return OrderCheckoutResponse(**result)


@order_router.post("/confirm", response_model=OrderResponse)
def confirm_order(
    body: ConfirmPaymentRequest,
    customer: Customer = Depends(current_customer),
    locks: TransactionLocks = Depends(transaction_locks),
) -> OrderResponse:
    with locks.hold(body.transaction_id):
        order_id = current_domain.process(
            ConfirmOrderPayment(transaction_id=body.transaction_id, customer_id=customer.id),
            asynchronous=False,
        )
    return _order_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Promo Router
# ---------------------------------------------------------------------------
promo_router = APIRouter(prefix="/promos", tags=["promos"])


@promo_router.get("", response_model=list[PromoResponse])
async def list_promos(
    q: str | None = Query(default=None, alias="_q"),
    customer: Customer = Depends(current_customer),
) -> list[PromoResponse]:
    promos = current_domain.repository_for(Promo).find_for_customer(customer.id, search=q)
    return [_promo_response(promo) for promo in promos]


@promo_router.get("/{promo_id}", response_model=PromoResponse)
async def get_promo(promo_id: str, customer: Customer = Depends(current_customer)) -> PromoResponse:
    promo = current_domain.repository_for(Promo).get_for_customer(promo_id, customer.id)
    return _promo_response(promo)


@promo_router.post("", status_code=201, response_model=PromoCheckoutResponse)
def issue_promo(
    body: IssuePromoRequest,
    customer: Customer = Depends(current_customer),
    origin: str | None = Header(default=None),
) -> PromoCheckoutResponse:
    command = IssuePromo(
        customer_id=customer.id,
        giftcard_slug=body.giftcard,
        email_to=body.email_to,
        user_name=customer.username,
        user_email=customer.email,
        user_phone=customer.phone,
        site_url=site_url(origin),
    )
    try:
        result = current_domain.process(command, asynchronous=False)
    except (ValidationError, GatewayError):
        raise
    except Exception:
        logger.exception("promo_issue_failed", customer_id=customer.id)
        raise
    return PromoCheckoutResponse(**result)


@promo_router.post("/confirm", response_model=PromoResponse)
def confirm_promo(
    body: ConfirmPaymentRequest,
    customer: Customer = Depends(current_customer),
    locks: TransactionLocks = Depends(transaction_locks),
) -> PromoResponse:
    with locks.hold(body.transaction_id):
        promo_id = current_domain.process(
            ConfirmPromoPayment(transaction_id=body.transaction_id, customer_id=customer.id),
            asynchronous=False,
        )
    return _promo_response(current_domain.repository_for(Promo).get(promo_id))


# ---------------------------------------------------------------------------
# Catalogue Routers
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["catalogue"])


@product_router.post("", status_code=201, response_model=CatalogueIdResponse)
async def add_product(body: CatalogueEntryRequest, _admin: Customer = Depends(require_admin)) -> CatalogueIdResponse:
    command = AddProduct(name=body.name, slug=body.slug, price=body.price, description=body.description)
    result = current_domain.process(command, asynchronous=False)
    return CatalogueIdResponse(id=result)


@product_router.get("/{slug}", response_model=CatalogueEntryResponse)
async def get_product(slug: str) -> CatalogueEntryResponse:
    product = current_domain.repository_for(Product).find_by_slug(slug)
    if product is None:
        raise ObjectNotFoundError({"_entity": f"No product with slug '{slug}'"})
    return _catalogue_response(product)


giftcard_router = APIRouter(prefix="/giftcards", tags=["catalogue"])


@giftcard_router.post("", status_code=201, response_model=CatalogueIdResponse)
async def add_giftcard(body: CatalogueEntryRequest, _admin: Customer = Depends(require_admin)) -> CatalogueIdResponse:
    command = AddGiftcard(name=body.name, slug=body.slug, price=body.price, description=body.description)
    result = current_domain.process(command, asynchronous=False)
    return CatalogueIdResponse(id=result)


@giftcard_router.get("/{slug}", response_model=CatalogueEntryResponse)
async def get_giftcard(slug: str) -> CatalogueEntryResponse:
    giftcard = current_domain.repository_for(Giftcard).find_by_slug(slug)
    if giftcard is None:
        raise ObjectNotFoundError({"_entity": f"No giftcard with slug '{slug}'"})
    return _catalogue_response(giftcard)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.get("/orders", response_model=list[OrderReportResponse])
async def order_report(
    status: str | None = None,
    _admin: Customer = Depends(require_admin),
) -> list[OrderReportResponse]:
    return [
        OrderReportResponse(
            order_id=str(row.order_id),
            customer_id=str(row.customer_id),
            customer_name=row.customer_name,
            customer_email=row.customer_email,
            customer_phone=row.customer_phone,
            status=row.status,
            total=row.total,
            currency=row.currency,
            item_count=row.item_count or 0,
            placed_at=row.placed_at,
            paid_at=row.paid_at,
        )
        for row in list_order_reports(status)
    ]
