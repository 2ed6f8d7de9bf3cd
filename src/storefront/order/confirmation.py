"""Order confirmation — check settlement with the payment gateway and mark the order paid."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.gateway import get_gateway
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_NOT_VERIFIED = "It seems like the order wasn't verified, please contact support"


@storefront.command(part_of="Order")
class ConfirmOrderPayment:
    transaction_id = String(required=True, max_length=255)
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class ConfirmOrderPaymentHandler:
    @handle(ConfirmOrderPayment)
    def confirm_order_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_transaction_id(command.transaction_id)
        if str(order.customer_id) != str(command.customer_id):
            raise ObjectNotFoundError({"_entity": f"No order found for transaction {command.transaction_id}"})

        if order.is_paid:
            logger.info("order_already_paid", order_id=str(order.id))
            return str(order.id)

        intent = get_gateway().retrieve_intent(command.transaction_id)
        if not intent.succeeded:
            logger.warning(
                "order_not_verified",
                order_id=str(order.id),
                transaction_id=command.transaction_id,
                intent_status=intent.status,
            )
            raise ValidationError({"transaction_id": [ORDER_NOT_VERIFIED]})

        order.mark_paid()
        repo.add(order)
        logger.info("order_paid", order_id=str(order.id), transaction_id=command.transaction_id)
        return str(order.id)
