"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Units were taken out of stock by a placed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class StockRestored:
    """Units were put back into stock (order cancellation or restock)."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    reason = String(max_length=50)


@storefront.event(part_of="Product")
class ProductRatingRecalculated:
    __version__ = 1

    product_id = Identifier(required=True)
    average_rating = Float(required=True)
    num_reviews = Integer(required=True)
