"""Application tests for catalogue management commands."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.giftcard import Giftcard
from storefront.catalogue.management import AddGiftcard, AddProduct
from storefront.catalogue.product import Product


class TestAddProduct:
    def test_product_is_findable_by_slug(self):
        product_id = current_domain.process(
            AddProduct(name="A2 Cow Ghee", slug="a2-cow-ghee", price=850.0, description="500 ml jar"),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).find_by_slug("a2-cow-ghee")
        assert str(product.id) == product_id
        assert product.description == "500 ml jar"

    def test_unknown_slug_returns_none(self):
        assert current_domain.repository_for(Product).find_by_slug("missing") is None

    def test_duplicate_slug_rejected(self, add_product):
        add_product("a2-cow-ghee", 850.0)
        with pytest.raises(ValidationError) as exc:
            add_product("a2-cow-ghee", 900.0)
        assert "slug" in exc.value.messages

    def test_list_all_sorted_by_name(self, add_product):
        add_product("paneer", 120.0, name="Paneer")
        add_product("curd", 40.0, name="Curd")
        names = [p.name for p in current_domain.repository_for(Product).list_all()]
        assert names == ["Curd", "Paneer"]


class TestAddGiftcard:
    def test_giftcard_is_findable_by_slug(self):
        current_domain.process(AddGiftcard(name="Gift card 500", slug="gift-500", price=500.0), asynchronous=False)
        giftcard = current_domain.repository_for(Giftcard).find_by_slug("gift-500")
        assert giftcard.price == 500.0

    def test_duplicate_slug_rejected(self, add_giftcard):
        add_giftcard("gift-500", 500.0)
        with pytest.raises(ValidationError):
            add_giftcard("gift-500", 500.0)

    def test_list_all_sorted_by_price(self, add_giftcard):
        add_giftcard("gift-2000", 2000.0)
        add_giftcard("gift-500", 500.0)
        prices = [g.price for g in current_domain.repository_for(Giftcard).list_all()]
        assert prices == [500.0, 2000.0]
