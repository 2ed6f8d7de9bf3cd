"""Application tests for receipt and voucher emails sent on payment confirmation."""

import json

from protean import current_domain

from storefront.order.confirmation import ConfirmOrderPayment
from storefront.order.intake import PlaceOrder
from storefront.order.order import Order
from storefront.promo.confirmation import ConfirmPromoPayment
from storefront.promo.issuance import IssuePromo
from storefront.promo.promo import Promo


def _paid_order(add_product, gateway, email="asha@example.com"):
    add_product("ghee", 61728.25)
    result = current_domain.process(
        PlaceOrder(
            customer_id="cust-001",
            cart_items=json.dumps([{"slug": "ghee", "quantity": 2}]),
            address=json.dumps({"line1": "1 Main St", "city": "Pune", "postal_code": "411001", "country": "India"}),
            user_name="Asha Rao",
            user_email=email,
        ),
        asynchronous=False,
    )
    order = current_domain.repository_for(Order).get(result["order_id"])
    gateway.settle(order.transaction_id)
    current_domain.process(
        ConfirmOrderPayment(transaction_id=order.transaction_id, customer_id="cust-001"),
        asynchronous=False,
    )
    return order


class TestOrderReceipt:
    def test_receipt_sent_to_customer(self, add_product, gateway, mailer):
        order = _paid_order(add_product, gateway)

        sent = mailer.sent_to("asha@example.com")
        assert len(sent) == 1
        assert str(order.id) in sent[0]["subject"]
        assert "₹1,23,456.50" in sent[0]["body"]
        assert order.transaction_id in sent[0]["body"]

    def test_no_receipt_before_payment(self, add_product, mailer):
        add_product("ghee", 100.0)
        current_domain.process(
            PlaceOrder(
                customer_id="cust-001",
                cart_items=json.dumps([{"slug": "ghee", "quantity": 1}]),
                address=json.dumps({"line1": "1 Main St", "city": "Pune", "postal_code": "411001", "country": "India"}),
                user_email="asha@example.com",
            ),
            asynchronous=False,
        )
        assert mailer.sent_emails == []

    def test_failed_delivery_does_not_undo_payment(self, add_product, gateway, mailer):
        mailer.configure(should_succeed=False)
        order = _paid_order(add_product, gateway)
        assert current_domain.repository_for(Order).get(order.id).is_paid


class TestVoucherDelivery:
    def test_voucher_sent_to_recipient(self, add_giftcard, gateway, mailer):
        add_giftcard("gift-1000", 1000.0)
        result = current_domain.process(
            IssuePromo(
                customer_id="cust-001",
                giftcard_slug="gift-1000",
                email_to="friend@example.com",
                user_email="asha@example.com",
            ),
            asynchronous=False,
        )
        promo = current_domain.repository_for(Promo).get(result["promo_id"])
        gateway.settle(promo.transaction_id)
        current_domain.process(
            ConfirmPromoPayment(transaction_id=promo.transaction_id, customer_id="cust-001"),
            asynchronous=False,
        )

        sent = mailer.sent_to("friend@example.com")
        assert len(sent) == 1
        assert promo.promo_code in sent[0]["body"]
        assert "₹1,000.00" in sent[0]["body"]
        assert mailer.sent_to("asha@example.com") == []
