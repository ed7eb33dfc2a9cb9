"""Review aggregate — one customer's rating of a product bought in an order."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.review.events import ReviewEdited, ReviewSubmitted


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    name = String(max_length=100)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def submit(cls, product_id, order_id, user_id, rating, comment, name=None):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            order_id=order_id,
            user_id=user_id,
            name=name,
            rating=rating,
            comment=comment,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                order_id=str(order_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review

    def edit(self, rating=None, comment=None):
        previous = self.rating
        if rating is not None:
            self.rating = rating
        if comment is not None:
            self.comment = comment
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                previous_rating=previous,
                rating=self.rating,
            )
        )
