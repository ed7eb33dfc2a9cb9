"""Review submission, editing and removal — commands and handler.

Every change recomputes the reviewed product's ``average_rating`` and
``num_reviews`` from the stored reviews.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.review.rating import recompute
from storefront.review.review import Review
from storefront.utils.queries import delete, fetch_all, fetch_one


@storefront.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


@storefront.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(min_value=1, max_value=5)
    comment = Text()


@storefront.command(part_of="Review")
class RemoveReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_admin = Boolean(default=False)


def refresh_product_rating(product_id, exclude_review_id=None, extra_rating=None):
    """Recompute and store a product's rating from its reviews.

    ``exclude_review_id`` drops a review from the stored set and
    ``extra_rating`` adds one that is not yet visible to queries.
    """
    repo = current_domain.repository_for(Product)
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        return

    ratings = [r.rating for r in fetch_all(Review, product_id=str(product_id)) if str(r.id) != str(exclude_review_id)]
    if extra_rating is not None:
        ratings.append(extra_rating)

    average, count = recompute(ratings)
    product.update_rating(average, count)
    repo.add(product)


def _owned_review(review_id, user_id, allow_admin=False):
    try:
        review = current_domain.repository_for(Review).get(review_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"review": ["Review not found"]}) from None
    if not allow_admin and str(review.user_id) != str(user_id):
        raise ObjectNotFoundError({"review": ["Review not found"]})
    return review


@storefront.command_handler(part_of=Review)
class ReviewManagementHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        try:
            order = current_domain.repository_for(Order).get(command.order_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError({"order": ["Order not found"]}) from None
        if str(order.user_id) != str(command.user_id):
            raise ObjectNotFoundError({"order": ["Order not found"]})

        if not any(str(item.product_id) == str(command.product_id) for item in order.items):
            raise ValidationError({"product": ["This product is not in the specified order."]})

        duplicate = fetch_one(
            Review,
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            order_id=str(command.order_id),
        )
        if duplicate is not None:
            raise ValidationError({"review": ["You have already reviewed this product for this order."]})

        try:
            name = current_domain.repository_for(Customer).get(command.user_id).name
        except ObjectNotFoundError:
            name = None

        review = Review.submit(
            product_id=command.product_id,
            order_id=command.order_id,
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
            name=name,
        )
        current_domain.repository_for(Review).add(review)
        refresh_product_rating(command.product_id, exclude_review_id=review.id, extra_rating=review.rating)
        return str(review.id)

    @handle(EditReview)
    def edit_review(self, command):
        review = _owned_review(command.review_id, command.user_id)
        review.edit(rating=command.rating, comment=command.comment)
        current_domain.repository_for(Review).add(review)
        refresh_product_rating(review.product_id, exclude_review_id=review.id, extra_rating=review.rating)

    @handle(RemoveReview)
    def remove_review(self, command):
        review = _owned_review(command.review_id, command.user_id, allow_admin=command.is_admin)
        product_id = str(review.product_id)
        delete(review)
        refresh_product_rating(product_id, exclude_review_id=command.review_id)
