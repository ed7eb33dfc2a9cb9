"""Storefront bounded context — catalog stock, carts, orders and reviews.

Handles the order lifecycle (cart to order conversion, stock decrement,
status transitions with stock restoration), the per-customer shopping cart,
and review-driven product rating aggregation.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
