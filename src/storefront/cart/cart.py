"""Cart aggregate — one active cart per customer.

A cart is created lazily by the first add-to-cart and physically deleted as
soon as its last line goes away, so a stored cart always has at least one
line. Lines are keyed by (product, color): adding the same pair again sums
the quantity and overwrites the price with the latest one.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


class CartAction(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    DELETE = "delete"


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    color = String(max_length=50, default="")
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def subtotal(self):
        return self.price * self.quantity


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    @property
    def is_empty(self):
        return not self.items

    @property
    def item_count(self):
        return len(self.items)

    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})
        return item

    # -------------------------------------------------------------------
    # Line mutation
    # -------------------------------------------------------------------
    def add_item(self, product_id, color, quantity, price):
        """Add a line, merging into an existing (product, color) line."""
        color = color or ""
        existing = next(
            (i for i in self.items if str(i.product_id) == str(product_id) and (i.color or "") == color),
            None,
        )

        if existing:
            existing.quantity += quantity
            existing.price = price
            item_id = str(existing.id)
            new_quantity = existing.quantity
        else:
            item = CartItem(product_id=product_id, color=color, quantity=quantity, price=price)
            self.add_items(item)
            item_id = str(item.id)
            new_quantity = quantity

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=item_id,
                product_id=str(product_id),
                color=color,
                quantity=new_quantity,
                price=price,
            )
        )
        return item_id

    def apply_action(self, item_id, action):
        """Apply an ``increase`` / ``decrease`` / ``delete`` action to one line."""
        try:
            action = CartAction(action)
        except ValueError:
            raise ValidationError({"action": ["Invalid action"]}) from None

        item = self._find_item(item_id)

        if action == CartAction.INCREASE:
            self._set_quantity(item, item.quantity + 1)
        elif action == CartAction.DECREASE and item.quantity > 1:
            self._set_quantity(item, item.quantity - 1)
        else:
            self.remove_item(item_id)

    def _set_quantity(self, item, new_quantity):
        previous = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def remove_product_lines(self, product_id):
        """Drop every line of ``product_id``. Returns True if anything was removed."""
        lines = [i for i in self.items if str(i.product_id) == str(product_id)]
        for line in lines:
            self.remove_item(line.id)
        return bool(lines)

    def snapshot(self):
        """Line data as plain dicts, used to build an order."""
        return [
            {
                "product_id": str(item.product_id),
                "color": item.color or "",
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in self.items
        ]
