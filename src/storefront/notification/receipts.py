"""Send receipts and vouchers once a payment has been confirmed."""

from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.notification import get_mailer
from storefront.notification.templates import OrderReceiptTemplate, VoucherDeliveryTemplate
from storefront.order.events import OrderPaid
from storefront.order.order import Order
from storefront.promo.events import PromoPaid
from storefront.promo.promo import Promo
from storefront.settings import store_name
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _deliver(to: str, content: dict, **log_context) -> None:
    result = get_mailer().send(to=to, subject=content["subject"], body=content["body"])
    if result["status"] == "sent":
        logger.info("email_sent", to=to, message_id=result["message_id"], **log_context)
    else:
        logger.warning("email_failed", to=to, error=result.get("error"), **log_context)


@storefront.event_handler(part_of=Order)
class OrderReceiptHandler:
    @handle(OrderPaid)
    def on_order_paid(self, event: OrderPaid) -> None:
        if not event.customer_email:
            logger.info("order_receipt_skipped", order_id=str(event.order_id))
            return

        content = OrderReceiptTemplate.render(
            {
                "store_name": store_name(),
                "order_id": str(event.order_id),
                "customer_name": event.customer_name,
                "total": event.total,
                "currency": event.currency,
                "transaction_id": event.transaction_id,
            }
        )
        _deliver(event.customer_email, content, order_id=str(event.order_id))


@storefront.event_handler(part_of=Promo)
class VoucherDeliveryHandler:
    @handle(PromoPaid)
    def on_promo_paid(self, event: PromoPaid) -> None:
        content = VoucherDeliveryTemplate.render(
            {
                "store_name": store_name(),
                "promo_code": event.promo_code,
                "promo_price": event.promo_price,
                "currency": event.currency,
            }
        )
        _deliver(event.email_to, content, promo_id=str(event.promo_id))
