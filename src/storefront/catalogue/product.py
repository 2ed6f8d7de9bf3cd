"""Product aggregate — the catalogue entries a cart refers to by slug.

Checkout only reads products; they are added through the admin catalogue
endpoints.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.fields import DateTime, Float, String, Text

from storefront.catalogue.slug import ensure_valid_slug
from storefront.domain import storefront


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    slug = String(required=True, max_length=200, unique=True)
    price = Float(required=True, min_value=0.0)
    description = Text()
    created_at = DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        ensure_valid_slug(self.slug)

    @classmethod
    def create(cls, name, slug, price, description=None):
        return cls(
            name=name,
            slug=slug,
            price=price,
            description=description,
            created_at=datetime.now(UTC),
        )


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_slug(self, slug: str) -> Product | None:
        """Return the product with this slug, or None."""
        items = self._dao.query.filter(slug=slug).all().items
        return items[0] if items else None

    def list_all(self) -> list[Product]:
        return self._dao.query.order_by("name").all().items
