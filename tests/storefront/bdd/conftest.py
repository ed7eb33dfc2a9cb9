"""Shared BDD fixtures and step definitions for the Storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.items import cart_for
from storefront.order.order import Order
from storefront.product.product import Product

CUSTOMER_ID = "bdd-user"


@pytest.fixture()
def customer_id():
    return CUSTOMER_ID


@pytest.fixture()
def error():
    return {}


@pytest.fixture()
def catalog():
    """Product ids by name."""
    return {}


@pytest.fixture()
def placed():
    return {}


def _product(catalog, name):
    return current_domain.repository_for(Product).get(catalog[name])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a customer with shipping information")
def customer_with_shipping(make_customer):
    make_customer(user_id=CUSTOMER_ID, email="bdd@example.com")


@given(parsers.cfparse('a product "{name}" priced {price:d} with {stock:d} in stock'))
def product_in_stock(make_product, catalog, name, price, stock):
    catalog[name] = make_product(name=name, price=float(price), stock=stock)


@given(parsers.cfparse('the cart holds {quantity:d} "{color}" units of "{name}" at {price:d}'))
def cart_holds(add_to_cart, catalog, quantity, color, name, price):
    add_to_cart(CUSTOMER_ID, catalog[name], quantity=quantity, price=float(price), color=color)


@given(parsers.cfparse('"{name}" stock drops to {stock:d}'))
def stock_drops(catalog, name, stock):
    product = _product(catalog, name)
    product.decrement_stock(product.stock - stock)
    current_domain.repository_for(Product).add(product)


@given("the customer placed the order")
def customer_placed_order(place_order, placed):
    placed["order_id"] = place_order(CUSTOMER_ID)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {total:d}"))
def order_total_is(placed, total):
    assert current_domain.repository_for(Order).get(placed["order_id"]).total_price == total


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(placed, status):
    assert current_domain.repository_for(Order).get(placed["order_id"]).status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock_is(catalog, name, stock):
    assert _product(catalog, name).stock == stock


@then("the customer has no cart")
def no_cart():
    assert cart_for(CUSTOMER_ID) is None


@then(parsers.cfparse("the customer still has {count:d} line in the cart"))
def cart_lines(count):
    assert cart_for(CUSTOMER_ID).item_count == count


@then(parsers.cfparse('an email with subject "{subject}" was sent'))
def email_sent(email_channel, subject):
    assert subject in [email["subject"] for email in email_channel.sent_emails]


@then(parsers.cfparse('the request fails on "{field}"'))
def request_fails(error, field):
    assert isinstance(error.get("exc"), ValidationError)
    assert field in error["exc"].messages
