"""Storefront bounded context — catalogue lookups, order checkout and gift-card promos.

Orders and promos follow the same create-then-confirm lifecycle: a pending
record is persisted, a charge intent is requested from the payment gateway,
and the record is flipped to paid once the gateway reports settlement.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
