"""Promo issuance — sell a gift-card voucher through the payment gateway."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.giftcard import Giftcard
from storefront.domain import storefront
from storefront.gateway import get_gateway
from storefront.money import to_minor_units
from storefront.order.intake import intent_metadata
from storefront.promo.promo import Promo
from storefront.promo.voucher import unique_voucher_code
from storefront.settings import store_currency, store_name, voucher_prefix
from storefront.utils.logging import add_context, get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Promo")
class IssuePromo:
    customer_id = Identifier(required=True)
    giftcard_slug = String(max_length=200)
    email_to = String(max_length=254)
    user_name = String(max_length=255)
    user_email = String(required=True, max_length=254)
    user_phone = String(max_length=30)
    site_url = String(max_length=500)


@storefront.command_handler(part_of=Promo)
class IssuePromoHandler:
    @handle(IssuePromo)
    def issue_promo(self, command):
        if not command.giftcard_slug:
            raise ValidationError({"giftcard": ["Please add a giftcard to the request body"]})

        giftcard = current_domain.repository_for(Giftcard).find_by_slug(command.giftcard_slug)
        if giftcard is None:
            raise ValidationError({"giftcard": ["Giftcard is not found"]})

        repo = current_domain.repository_for(Promo)
        currency = store_currency()
        promo = Promo.issue(
            customer_id=command.customer_id,
            giftcard_id=giftcard.id,
            promo_code=unique_voucher_code(voucher_prefix(), repo.code_exists),
            promo_price=giftcard.price,
            currency=currency,
            email_to=command.email_to or command.user_email,
        )

        intent = get_gateway().create_intent(
            amount=to_minor_units(promo.promo_price),
            currency=currency,
            metadata=intent_metadata(
                command.user_name,
                command.user_email,
                command.user_phone,
                command.site_url,
                f"Promo Id #{promo.id}",
            ),
            receipt_email=command.user_email,
            description=f"{store_name()} PromoId #{promo.id}",
        )
        # Later failures in this request, including the commit, log against the intent
        add_context(transaction_id=intent.intent_id, promo_id=str(promo.id))
        promo.attach_transaction(intent.intent_id)
        repo.add(promo)

        logger.info(
            "promo_issued",
            promo_id=str(promo.id),
            giftcard=giftcard.slug,
            transaction_id=intent.intent_id,
        )
        return {"promo_id": str(promo.id), "client_secret": intent.client_secret}
