import json
import os

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    from storefront.notification.channel import reset_channels

    reset_channels()
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
    reset_channels()


@pytest.fixture()
def email_channel():
    from storefront.notification.channel import get_email_channel

    return get_email_channel()


@pytest.fixture()
def make_product():
    """Factory: add a product through the command pipeline and return its id."""
    from protean import current_domain
    from storefront.product.management import AddProduct

    def _make(name="Trail Runner", price=500.0, stock=10, colors=("Red", "Blue")):
        return current_domain.process(
            AddProduct(name=name, price=price, stock=stock, colors=json.dumps(list(colors))),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def make_customer():
    """Factory: register a customer, with shipping info unless told otherwise."""
    from protean import current_domain
    from storefront.customer.management import RegisterCustomer, UpdateShippingInfo

    def _make(user_id="user-001", email=None, name="Asha Rao", role="user", shipping=True):
        current_domain.process(
            RegisterCustomer(user_id=user_id, email=email or f"{user_id}@example.com", name=name, role=role),
            asynchronous=False,
        )
        if shipping:
            current_domain.process(
                UpdateShippingInfo(
                    user_id=user_id,
                    address="12 MG Road",
                    city="Bengaluru",
                    postal_code="560001",
                    country="India",
                ),
                asynchronous=False,
            )
        return user_id

    return _make


@pytest.fixture()
def add_to_cart():
    from protean import current_domain
    from storefront.cart.items import AddToCart

    def _add(user_id, product_id, quantity=1, price=500.0, color="Red"):
        return current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, color=color, quantity=quantity, price=price),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order():
    from protean import current_domain
    from storefront.order.creation import PlaceOrder

    def _place(user_id, payment_method="cashondelivery", **card):
        return current_domain.process(
            PlaceOrder(user_id=user_id, payment_method=payment_method, **card),
            asynchronous=False,
        )

    return _place
