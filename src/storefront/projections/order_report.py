"""Order report — admin listing of every order with customer contact details."""

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderPaid, OrderPlaced
from storefront.order.order import Order, OrderStatus


@storefront.projection
class OrderReport:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    customer_name = String()
    customer_email = String()
    customer_phone = String()
    status = String(required=True)
    total = Float()
    currency = String(default="INR")
    item_count = Integer(default=0)
    placed_at = DateTime()
    paid_at = DateTime()


@storefront.projector(projector_for=OrderReport, aggregates=[Order])
class OrderReportProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderReport).add(
            OrderReport(
                order_id=event.order_id,
                customer_id=event.customer_id,
                customer_name=event.customer_name,
                customer_email=event.customer_email,
                customer_phone=event.customer_phone,
                status=OrderStatus.PENDING.value,
                total=event.total,
                currency=event.currency,
                item_count=event.item_count,
                placed_at=event.placed_at,
            )
        )

    @on(OrderPaid)
    def on_order_paid(self, event):
        repo = current_domain.repository_for(OrderReport)
        report = repo.get(event.order_id)
        report.status = OrderStatus.PAID.value
        report.paid_at = event.paid_at
        repo.add(report)


def list_order_reports(status: str | None = None) -> list[OrderReport]:
    """Report rows, newest first, optionally restricted to one status."""
    query = current_domain.repository_for(OrderReport)._dao.query
    if status:
        query = query.filter(status=status)
    return query.order_by("-placed_at").all().items
