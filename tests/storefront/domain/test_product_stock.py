import pytest
from protean.exceptions import ValidationError
from storefront.product.events import ProductAdded, StockDecremented, StockRestored
from storefront.product.product import DEFAULT_PRODUCT_RATING, Product


def _product(stock=10):
    product = Product.create(name="Trail Runner", price=500.0, stock=stock, colors=["Red"])
    product._events.clear()
    return product


class TestProductCreation:
    def test_defaults(self):
        product = Product.create(name="Trail Runner", price=500.0, stock=3)
        assert product.average_rating == DEFAULT_PRODUCT_RATING
        assert product.num_reviews == 0
        assert product.color_list == []
        assert product.image_list == []

    def test_raises_product_added(self):
        product = Product.create(name="Trail Runner", price=500.0, stock=3)
        assert isinstance(product._events[0], ProductAdded)
        assert product._events[0].stock == 3

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(name="Broken", price=-1.0, stock=1)


class TestDecrementStock:
    def test_decrements(self):
        product = _product(stock=10)
        product.decrement_stock(2)
        assert product.stock == 8

    def test_can_take_last_unit(self):
        product = _product(stock=2)
        product.decrement_stock(2)
        assert product.stock == 0

    def test_insufficient_stock_names_product(self):
        product = _product(stock=1)
        with pytest.raises(ValidationError) as exc_info:
            product.decrement_stock(2)
        assert exc_info.value.messages["stock"] == ["Insufficient stock for product: Trail Runner"]
        assert product.stock == 1

    def test_raises_event(self):
        product = _product(stock=5)
        product.decrement_stock(3)
        event = product._events[-1]
        assert isinstance(event, StockDecremented)
        assert event.previous_stock == 5
        assert event.new_stock == 2

    def test_zero_quantity_rejected(self):
        product = _product()
        with pytest.raises(ValidationError) as exc_info:
            product.decrement_stock(0)
        assert "quantity" in exc_info.value.messages


class TestRestoreStock:
    def test_restores(self):
        product = _product(stock=8)
        product.restore_stock(2)
        assert product.stock == 10

    def test_raises_event_with_reason(self):
        product = _product(stock=0)
        product.restore_stock(4, reason="Restock")
        event = product._events[-1]
        assert isinstance(event, StockRestored)
        assert event.new_stock == 4
        assert event.reason == "Restock"


class TestRating:
    def test_update_rating(self):
        product = _product()
        product.update_rating(4.5, 2)
        assert product.average_rating == 4.5
        assert product.num_reviews == 2
