"""Product aggregate — catalog entry and the stock ledger.

Stock is a plain integer count per product. Every change goes through
``decrement_stock`` / ``restore_stock`` so the count can never drop below
zero and each movement is recorded as a domain event.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.product.events import (
    ProductAdded,
    ProductRatingRecalculated,
    StockDecremented,
    StockRestored,
)

DEFAULT_PRODUCT_RATING = 5.0


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0, default=0)
    category_id = Identifier()
    images = Text()  # JSON array of image URLs
    colors = Text()  # JSON array of color names
    average_rating = Float(default=DEFAULT_PRODUCT_RATING, min_value=0.0, max_value=5.0)
    num_reviews = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, stock=0, description=None, category_id=None, images=None, colors=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            stock=stock,
            category_id=category_id,
            images=json.dumps(images or []),
            colors=json.dumps(colors or []),
            average_rating=DEFAULT_PRODUCT_RATING,
            num_reviews=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=price,
                stock=stock,
                added_at=now,
            )
        )
        return product

    @property
    def color_list(self):
        return json.loads(self.colors) if self.colors else []

    @property
    def image_list(self):
        return json.loads(self.images) if self.images else []

    # -------------------------------------------------------------------
    # Stock ledger
    # -------------------------------------------------------------------
    def has_stock_for(self, quantity):
        return self.stock >= quantity

    def decrement_stock(self, quantity):
        """Take ``quantity`` units out of stock, refusing to go below zero."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise ValidationError({"stock": [f"Insufficient stock for product: {self.name}"]})

        previous = self.stock
        self.stock = previous - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
            )
        )

    def restore_stock(self, quantity, reason="OrderCancelled"):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous = self.stock
        self.stock = previous + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockRestored(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                reason=reason,
            )
        )

    # -------------------------------------------------------------------
    # Rating
    # -------------------------------------------------------------------
    def update_rating(self, average_rating, num_reviews):
        self.average_rating = average_rating
        self.num_reviews = num_reviews
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductRatingRecalculated(
                product_id=str(self.id),
                average_rating=average_rating,
                num_reviews=num_reviews,
            )
        )
