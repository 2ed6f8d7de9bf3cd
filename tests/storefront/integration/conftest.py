import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import admin_router, giftcard_router, order_router, product_router, promo_router
from storefront.api.auth import issue_token
from storefront.api.errors import register_gateway_error_handler


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (order_router, promo_router, product_router, giftcard_router, admin_router):
        app.include_router(router)
    register_exception_handlers(app)
    register_gateway_error_handler(app)
    return TestClient(app)


def bearer(customer_id="cust-001", email="asha@example.com", role="customer", **claims):
    token = issue_token(customer_id, email, role=role, **claims)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def shopper():
    return bearer(username="Asha Rao", phone="+91 98450 00000")


@pytest.fixture()
def admin():
    return bearer(customer_id="admin-001", email="admin@example.com", role="admin")


@pytest.fixture()
def seeded_catalogue(client, admin):
    for slug, price in (("a", 100.0), ("ghee", 850.0)):
        response = client.post("/products", json={"name": slug.title(), "slug": slug, "price": price}, headers=admin)
        assert response.status_code == 201
    response = client.post("/giftcards", json={"name": "Gift card 1000", "slug": "gift-1000", "price": 1000.0}, headers=admin)
    assert response.status_code == 201


@pytest.fixture()
def other_shopper():
    return bearer(customer_id="cust-002", email="other@example.com")
