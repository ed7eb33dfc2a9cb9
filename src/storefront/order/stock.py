"""Stock reconciliation between orders and the product stock ledger."""

from collections import defaultdict

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.product.product import Product

logger = structlog.get_logger(__name__)


def take_stock(lines):
    """Decrement stock for every line, or for none of them.

    Demand is summed per product (a product can appear once per color) and
    checked against stock before any product is touched. On any shortfall a
    ``ValidationError`` naming the product is raised and nothing is changed.
    """
    repo = current_domain.repository_for(Product)

    demand = defaultdict(int)
    for line in lines:
        demand[str(line["product_id"])] += line["quantity"]

    products = {}
    for product_id, quantity in demand.items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            logger.warning("stock_check_failed", product_id=product_id, reason="product not found")
            raise ValidationError({"stock": ["Insufficient stock for product: unknown"]}) from None
        if not product.has_stock_for(quantity):
            raise ValidationError({"stock": [f"Insufficient stock for product: {product.name}"]})
        products[product_id] = product

    for line in lines:
        products[str(line["product_id"])].decrement_stock(line["quantity"])

    for product in products.values():
        repo.add(product)
        logger.info("stock_decremented", product_id=str(product.id), stock=product.stock)


def return_stock(lines):
    """Add each line's quantity back to its product.

    Lines whose product has since been deleted are skipped.
    """
    repo = current_domain.repository_for(Product)

    products = {}
    for line in lines:
        product_id = str(line["product_id"])
        if product_id not in products:
            try:
                products[product_id] = repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning("stock_restore_skipped", product_id=product_id, reason="product not found")
                products[product_id] = None
        if products[product_id] is not None:
            products[product_id].restore_stock(line["quantity"])

    for product in products.values():
        if product is not None:
            repo.add(product)
            logger.info("stock_restored", product_id=str(product.id), stock=product.stock)
