"""Order aggregate — an immutable snapshot of a checked-out cart.

Once placed, only ``status``, ``note`` and the stock bookkeeping flag change.
The total is computed once at placement and never recomputed.

Status flow:
    Pending → Shipped | Delivered | Cancelled   (set by an admin, any order)
    Pending → Cancelled                          (by the owning customer)
    Delivered → Completed                        (by the owning customer)

Cancelling returns each line's quantity to stock, at most once per order:
re-cancelling, or cancelling again after re-opening, changes status and note
only.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import OrderCompleted, OrderPlaced, OrderStatusChanged

SHIPPING_FEE = 100
CUSTOMER_CANCELLATION_NOTE = "Cancelled by user"


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cashondelivery"
    CREDIT_CARD = "creditcard"


# Statuses an admin may set through a status update
ADMIN_SETTABLE_STATUSES = {
    OrderStatus.PENDING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
}

# Status changes that notify the customer by email
NOTIFIABLE_STATUSES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, copied from the customer's profile at placement."""

    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.value_object(part_of="Order")
class PaymentDetails:
    """Card data captured for credit card orders. Never sent to a processor."""

    card_number = String(max_length=30)
    expiry_date = String(max_length=10)
    cvv = String(max_length=4)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    color = String(max_length=50, default="")
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def subtotal(self):
        return self.price * self.quantity


def order_total(lines):
    """Sum of line subtotals plus the flat shipping fee."""
    return sum(line["price"] * line["quantity"] for line in lines) + SHIPPING_FEE


def admin_status(value):
    """Parse a status an admin is allowed to set."""
    try:
        target = OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": ["Invalid status."]}) from None
    if target not in ADMIN_SETTABLE_STATUSES:
        raise ValidationError({"status": ["Invalid status."]})
    return target


def validate_payment(payment_method, card_number=None, expiry_date=None, cvv=None):
    """Check the payment method and, for cards, that all card fields are present.

    Returns the ``PaymentDetails`` to store, or ``None`` for cash on delivery.
    """
    try:
        method = PaymentMethod(payment_method)
    except ValueError:
        raise ValidationError({"payment_method": ["Invalid payment method."]}) from None

    if method != PaymentMethod.CREDIT_CARD:
        return None

    if not all(value and str(value).strip() for value in (card_number, expiry_date, cvv)):
        raise ValidationError(
            {"payment_details": ["Complete payment details are required for credit card payment method."]}
        )
    return PaymentDetails(card_number=card_number, expiry_date=expiry_date, cvv=cvv)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_price = Float(required=True, min_value=0.0)
    shipping_fee = Float(default=float(SHIPPING_FEE))
    payment_method = String(required=True, choices=PaymentMethod)
    payment_details = ValueObject(PaymentDetails)
    shipping_address = ValueObject(ShippingAddress)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    note = String(max_length=500)
    stock_restored = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, payment_method, shipping_address, payment_details=None):
        """Create a Pending order from cart line snapshots.

        Args:
            user_id: The customer placing the order.
            lines: List of dicts with product_id, color, quantity, price.
            payment_method: One of the ``PaymentMethod`` values.
            shipping_address: Dict with address, city, postal_code, country.
            payment_details: ``PaymentDetails`` for card orders, else None.
        """
        if not lines:
            raise ValidationError({"cart": ["Your cart is empty. Please add items to your cart."]})

        now = datetime.now(UTC)
        total = order_total(lines)
        order = cls(
            user_id=user_id,
            total_price=total,
            shipping_fee=float(SHIPPING_FEE),
            payment_method=payment_method,
            payment_details=payment_details,
            shipping_address=ShippingAddress(**shipping_address),
            status=OrderStatus.PENDING.value,
            stock_restored=False,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    color=line.get("color") or "",
                    quantity=line["quantity"],
                    price=line["price"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(order.lines()),
                total_price=total,
                shipping_fee=float(SHIPPING_FEE),
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    def lines(self):
        return [
            {
                "product_id": str(item.product_id),
                "color": item.color or "",
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in self.items
        ]

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def change_status(self, new_status, note=None):
        """Set a new status as an admin would.

        Returns the lines whose quantities must go back to stock: all lines
        the first time the order is cancelled, an empty list otherwise.
        """
        target = admin_status(new_status)

        if target == OrderStatus.CANCELLED and not (note and note.strip()):
            raise ValidationError({"note": ["Cancellation note required."]})

        previous = self.status
        self.status = target.value
        if target == OrderStatus.CANCELLED:
            self.note = note

        to_restore = []
        if target == OrderStatus.CANCELLED and not self.stock_restored:
            to_restore = self.lines()
            self.stock_restored = True

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous,
                new_status=target.value,
                note=self.note if target == OrderStatus.CANCELLED else None,
                items=json.dumps(self.lines()),
                total_price=self.total_price,
                stock_restored=bool(to_restore),
                changed_at=now,
            )
        )
        return to_restore

    def cancel_by_customer(self, note=None):
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise ValidationError({"status": ["Only pending orders can be cancelled."]})
        return self.change_status(OrderStatus.CANCELLED.value, note or CUSTOMER_CANCELLATION_NOTE)

    def complete(self):
        if OrderStatus(self.status) != OrderStatus.DELIVERED:
            raise ValidationError({"status": ["Only delivered orders can be completed."]})

        now = datetime.now(UTC)
        self.status = OrderStatus.COMPLETED.value
        self.updated_at = now

        self.raise_(OrderCompleted(order_id=str(self.id), user_id=str(self.user_id), completed_at=now))

    # -------------------------------------------------------------------
    # Catalog cascade
    # -------------------------------------------------------------------
    def remove_product_lines(self, product_id):
        """Strip lines of a deleted product. Returns True if anything was removed."""
        lines = [i for i in self.items if str(i.product_id) == str(product_id)]
        for line in lines:
            self.remove_items(line)
        if lines:
            self.updated_at = datetime.now(UTC)
        return bool(lines)
