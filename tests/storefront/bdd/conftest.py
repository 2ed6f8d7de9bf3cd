"""Shared BDD fixtures and step definitions for the storefront domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import parsers, then

from storefront.order.events import OrderPaid, OrderPlaced
from storefront.promo.events import PromoIssued, PromoPaid

_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderPaid": OrderPaid,
    "PromoIssued": PromoIssued,
    "PromoPaid": PromoPaid,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(request, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    aggregate = request.getfixturevalue("promo" if event_type.startswith("Promo") else "order")
    assert any(
        isinstance(e, event_cls) for e in aggregate._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in aggregate._events]}"


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
