import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

from storefront.gateway import reset_gateway, set_gateway
from storefront.gateway.fake_adapter import FakeGateway
from storefront.notification import reset_mailer, set_mailer
from storefront.notification.fake_email import FakeEmailAdapter


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    bed = DomainFixture(storefront)
    bed.setup()
    setup_db(storefront)
    yield bed
    drop_db(storefront)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        # Clear all databases and drain the event store
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture(autouse=True)
def mailer():
    fake = FakeEmailAdapter()
    set_mailer(fake)
    yield fake
    reset_mailer()


@pytest.fixture()
def add_product():
    """Add a product to the catalogue through the command handler; returns its id."""
    from storefront.catalogue.management import AddProduct

    def _add(slug, price, name=None):
        return current_domain.process(
            AddProduct(name=name or slug.replace("-", " ").title(), slug=slug, price=price),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def add_giftcard():
    from storefront.catalogue.management import AddGiftcard

    def _add(slug, price, name=None):
        return current_domain.process(
            AddGiftcard(name=name or f"Gift card {price:g}", slug=slug, price=price),
            asynchronous=False,
        )

    return _add
