"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A line was added to the cart, or merged into an existing line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    color = String()
    quantity = Integer(required=True)
    price = Float(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
