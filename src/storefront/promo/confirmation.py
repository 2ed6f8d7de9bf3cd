"""Promo confirmation — check settlement with the payment gateway and flag the promo paid."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.gateway import get_gateway
from storefront.promo.promo import Promo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PROMO_NOT_VERIFIED = "It seems like the promo wasn't verified, please contact support"


@storefront.command(part_of="Promo")
class ConfirmPromoPayment:
    transaction_id = String(required=True, max_length=255)
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Promo)
class ConfirmPromoPaymentHandler:
    @handle(ConfirmPromoPayment)
    def confirm_promo_payment(self, command):
        repo = current_domain.repository_for(Promo)
        promo = repo.find_by_transaction_id(command.transaction_id)
        if str(promo.customer_id) != str(command.customer_id):
            raise ObjectNotFoundError({"_entity": f"No promo found for transaction {command.transaction_id}"})

        if promo.paid:
            return str(promo.id)

        intent = get_gateway().retrieve_intent(command.transaction_id)
        if not intent.succeeded:
            logger.warning(
                "promo_not_verified",
                promo_id=str(promo.id),
                transaction_id=command.transaction_id,
                intent_status=intent.status,
            )
            raise ValidationError({"transaction_id": [PROMO_NOT_VERIFIED]})

        promo.mark_paid()
        repo.add(promo)
        logger.info("promo_paid", promo_id=str(promo.id), transaction_id=command.transaction_id)
        return str(promo.id)
