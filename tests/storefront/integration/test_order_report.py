"""Integration tests for the order report projection and admin endpoint."""

import json

import pytest
from protean import current_domain

from storefront.order.confirmation import ConfirmOrderPayment
from storefront.order.intake import PlaceOrder
from storefront.order.order import Order
from storefront.projections.order_report import OrderReport, list_order_reports

ADDRESS = json.dumps({"line1": "1 Main St", "city": "Pune", "postal_code": "411001", "country": "India"})


def _place(customer_id="cust-001", quantity=1):
    result = current_domain.process(
        PlaceOrder(
            customer_id=customer_id,
            cart_items=json.dumps([{"slug": "a", "quantity": quantity}, {"slug": "ghee", "quantity": 1}]),
            address=ADDRESS,
            user_name="Asha Rao",
            user_email="asha@example.com",
            user_phone="+91 98450 00000",
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(result["order_id"])


def _pay(order, gateway):
    gateway.settle(order.transaction_id)
    current_domain.process(
        ConfirmOrderPayment(transaction_id=order.transaction_id, customer_id=str(order.customer_id)),
        asynchronous=False,
    )


@pytest.mark.usefixtures("seeded_catalogue")
class TestOrderReportProjection:
    def test_placed_order_creates_pending_row(self):
        order = _place(quantity=2)

        row = current_domain.repository_for(OrderReport).get(order.id)

        assert row.status == "pending"
        assert row.customer_name == "Asha Rao"
        assert row.customer_email == "asha@example.com"
        assert row.customer_phone == "+91 98450 00000"
        assert row.total == 1050.0
        assert row.item_count == 2
        assert row.paid_at is None

    def test_paid_order_updates_row(self, gateway):
        order = _place()
        _pay(order, gateway)

        row = current_domain.repository_for(OrderReport).get(order.id)
        assert row.status == "paid"
        assert row.paid_at is not None

    def test_filter_by_status(self, gateway):
        paid = _place()
        _place()
        _pay(paid, gateway)

        assert [str(r.order_id) for r in list_order_reports("paid")] == [str(paid.id)]
        assert len(list_order_reports("pending")) == 1
        assert len(list_order_reports()) == 2


@pytest.mark.usefixtures("seeded_catalogue")
class TestOrderReportAPI:
    def test_admin_lists_all_customers_orders(self, client, admin):
        _place(customer_id="cust-001")
        _place(customer_id="cust-002")

        response = client.get("/admin/orders", headers=admin)

        assert response.status_code == 200
        assert {row["customer_id"] for row in response.json()} == {"cust-001", "cust-002"}

    def test_status_query(self, client, admin, gateway):
        paid = _place()
        _place()
        _pay(paid, gateway)

        rows = client.get("/admin/orders", params={"status": "paid"}, headers=admin).json()
        assert [row["order_id"] for row in rows] == [str(paid.id)]

    def test_customers_are_forbidden(self, client, shopper):
        assert client.get("/admin/orders", headers=shopper).status_code == 403
