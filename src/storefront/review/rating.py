"""Product rating aggregation."""

from storefront.product.product import DEFAULT_PRODUCT_RATING


def recompute(ratings: list[int]) -> tuple[float, int]:
    """Return ``(average rounded to one decimal, count)`` for a list of ratings.

    A product without reviews keeps the default rating of 5.
    """
    if not ratings:
        return DEFAULT_PRODUCT_RATING, 0
    return round(sum(ratings) / len(ratings), 1), len(ratings)
