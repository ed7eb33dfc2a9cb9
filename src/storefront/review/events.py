"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewEdited:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_rating = Integer(required=True)
    rating = Integer(required=True)
