"""Product management — add, restock and delete (with cascade)."""

import json

import structlog
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.review.review import Review
from storefront.utils.queries import delete, fetch_all

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)
    description = Text()
    category_id = Identifier()
    images = Text()  # JSON array of image URLs
    colors = Text()  # JSON array of color names


@storefront.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            category_id=command.category_id,
            images=json.loads(command.images) if command.images else [],
            colors=json.loads(command.colors) if command.colors else [],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restore_stock(command.quantity, reason="Restock")
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        """Remove a product and every trace of it.

        Reviews of the product are deleted, its lines are stripped from orders
        and carts, and orders or carts left without lines are deleted.
        """
        product_id = str(command.product_id)
        product = current_domain.repository_for(Product).get(product_id)

        for review in fetch_all(Review, product_id=product_id):
            delete(review)

        orders_touched = 0
        order_repo = current_domain.repository_for(Order)
        for order in fetch_all(Order):
            if not order.remove_product_lines(product_id):
                continue
            orders_touched += 1
            if order.items:
                order_repo.add(order)
            else:
                delete(order)

        cart_repo = current_domain.repository_for(Cart)
        for cart in fetch_all(Cart):
            if not cart.remove_product_lines(product_id):
                continue
            if cart.items:
                cart_repo.add(cart)
            else:
                delete(cart)

        delete(product)

        logger.info(
            "product_deleted",
            product_id=product_id,
            orders_touched=orders_touched,
        )
