"""Cart line management — commands and handler."""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.cart.cart import Cart, CartAction
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.utils.queries import delete, fetch_one

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    color = String(max_length=50, default="")
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    action = String(required=True, max_length=20)


def cart_for(user_id):
    """Return the user's cart, or ``None`` if they have none."""
    return fetch_one(Cart, user_id=str(user_id))


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError({"product": ["Product not found"]}) from None

        if not product.has_stock_for(command.quantity):
            raise ValidationError({"stock": ["Not enough stock available for this product."]})

        cart = cart_for(command.user_id) or Cart.create(user_id=command.user_id)
        item_id = cart.add_item(
            product_id=command.product_id,
            color=command.color,
            quantity=command.quantity,
            price=command.price,
        )
        current_domain.repository_for(Cart).add(cart)
        return item_id

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        """Apply the action; returns False when the cart was emptied and deleted."""
        if command.action not in {a.value for a in CartAction}:
            raise ValidationError({"action": ["Invalid action"]})

        cart = cart_for(command.user_id)
        if cart is None:
            raise ObjectNotFoundError({"cart": ["Cart not found"]})

        cart.apply_action(command.item_id, command.action)

        if cart.is_empty:
            delete(cart)
            logger.info("cart_deleted", cart_id=str(cart.id), user_id=str(command.user_id))
            return False

        current_domain.repository_for(Cart).add(cart)
        return True
