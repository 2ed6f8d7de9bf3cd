"""Email templates for checkout notifications."""

from storefront.money import format_amount


class OrderReceiptTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        store = context["store_name"]
        amount = format_amount(context["total"], context["currency"])
        name = context.get("customer_name") or "there"
        return {
            "subject": f"{store} - Payment received for order #{context['order_id']}",
            "body": (
                f"Hi {name},\n\n"
                f"We have received your payment of {amount} for order #{context['order_id']}.\n"
                f"Payment reference: {context['transaction_id']}\n\n"
                f"Thank you for shopping with {store}!"
            ),
        }


class VoucherDeliveryTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        store = context["store_name"]
        amount = format_amount(context["promo_price"], context["currency"])
        return {
            "subject": f"Your {store} gift card",
            "body": (
                f"You have received a {store} gift card worth {amount}.\n\n"
                f"Voucher code: {context['promo_code']}\n\n"
                "Apply the code at checkout to redeem it."
            ),
        }
