import pytest
from storefront.review.rating import recompute


class TestRecompute:
    def test_no_reviews_defaults_to_five(self):
        assert recompute([]) == (5.0, 0)

    def test_single_rating(self):
        assert recompute([3]) == (3.0, 1)

    @pytest.mark.parametrize(
        ("ratings", "expected"),
        [
            ([5, 4], 4.5),
            ([5, 4, 4], 4.3),
            ([1, 2, 2], 1.7),
        ],
    )
    def test_mean_rounded_to_one_decimal(self, ratings, expected):
        average, count = recompute(ratings)
        assert average == expected
        assert count == len(ratings)
