"""Catalogue management — commands and handlers for adding products and gift cards."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.giftcard import Giftcard
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    slug = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    description = Text()


@storefront.command(part_of="Giftcard")
class AddGiftcard:
    name = String(required=True, max_length=255)
    slug = String(required=True, max_length=200)
    price = Float(required=True, min_value=0.0)
    description = Text()


@storefront.command_handler(part_of=Product)
class ProductCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo.find_by_slug(command.slug) is not None:
            raise ValidationError({"slug": [f"A product with slug '{command.slug}' already exists"]})

        product = Product.create(
            name=command.name,
            slug=command.slug,
            price=command.price,
            description=command.description,
        )
        repo.add(product)
        return str(product.id)


@storefront.command_handler(part_of=Giftcard)
class GiftcardCatalogueHandler:
    @handle(AddGiftcard)
    def add_giftcard(self, command):
        repo = current_domain.repository_for(Giftcard)
        if repo.find_by_slug(command.slug) is not None:
            raise ValidationError({"slug": [f"A giftcard with slug '{command.slug}' already exists"]})

        giftcard = Giftcard.create(
            name=command.name,
            slug=command.slug,
            price=command.price,
            description=command.description,
        )
        repo.add(giftcard)
        return str(giftcard.id)
