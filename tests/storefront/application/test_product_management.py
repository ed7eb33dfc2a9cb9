import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from storefront.cart.items import cart_for
from storefront.order.order import Order
from storefront.product.management import DeleteProduct, RestockProduct
from storefront.product.product import Product
from storefront.review.management import SubmitReview
from storefront.review.review import Review
from storefront.utils.queries import fetch_all


def test_add_product(make_product):
    product = current_domain.repository_for(Product).get(make_product(name="Cap", price=100.0, stock=4))
    assert product.name == "Cap"
    assert product.stock == 4
    assert product.color_list == ["Red", "Blue"]


def test_restock(make_product):
    product_id = make_product(stock=1)
    current_domain.process(RestockProduct(product_id=product_id, quantity=5), asynchronous=False)
    assert current_domain.repository_for(Product).get(product_id).stock == 6


class TestDeleteProductCascade:
    @pytest.fixture()
    def catalog(self, make_customer, make_product, add_to_cart, place_order):
        doomed = make_product(name="Doomed")
        kept = make_product(name="Kept")

        make_customer(user_id="only-doomed")
        add_to_cart("only-doomed", doomed)
        only_doomed_order = place_order("only-doomed")
        current_domain.process(
            SubmitReview(
                user_id="only-doomed", product_id=doomed, order_id=only_doomed_order, rating=3, comment="meh"
            ),
            asynchronous=False,
        )

        make_customer(user_id="mixed")
        add_to_cart("mixed", doomed)
        add_to_cart("mixed", kept)
        mixed_order = place_order("mixed")

        add_to_cart("cart-only", doomed)
        add_to_cart("cart-mixed", doomed)
        add_to_cart("cart-mixed", kept)

        current_domain.process(DeleteProduct(product_id=doomed), asynchronous=False)
        return {"doomed": doomed, "kept": kept, "only_doomed_order": only_doomed_order, "mixed_order": mixed_order}

    def test_product_is_gone(self, catalog):
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(catalog["doomed"])

    def test_reviews_are_deleted(self, catalog):
        assert fetch_all(Review, product_id=catalog["doomed"]) == []

    def test_emptied_order_is_deleted(self, catalog):
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Order).get(catalog["only_doomed_order"])

    def test_mixed_order_keeps_other_lines(self, catalog):
        order = current_domain.repository_for(Order).get(catalog["mixed_order"])
        assert [str(i.product_id) for i in order.items] == [catalog["kept"]]

    def test_carts_are_cleaned(self, catalog):
        assert cart_for("cart-only") is None
        assert [str(i.product_id) for i in cart_for("cart-mixed").items] == [catalog["kept"]]
