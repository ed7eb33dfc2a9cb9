"""Domain events for the Order aggregate.

Order events drive the customer email notifications. Line items travel as
JSON so handlers need no access to the order itself.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into a Pending order and its stock was taken."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, color, quantity, price}
    total_price = Float(required=True)
    shipping_fee = Float(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The order moved to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    note = String()
    items = Text(required=True)  # JSON: list of {product_id, color, quantity, price}
    total_price = Float(required=True)
    stock_restored = Boolean(default=False)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCompleted:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    completed_at = DateTime(required=True)
