import pytest
from protean.exceptions import ValidationError
from storefront.customer.customer import Customer, Role
from storefront.customer.events import CustomerRegistered, ShippingInfoUpdated


def test_register_defaults_to_user_role():
    customer = Customer.register(user_id="user-001", email="asha@example.com", name="Asha")
    assert customer.role == Role.USER.value
    assert customer.is_admin is False
    assert customer.has_shipping_info is False
    assert isinstance(customer._events[-1], CustomerRegistered)


def test_register_rejects_invalid_email():
    with pytest.raises(ValidationError) as exc_info:
        Customer.register(user_id="user-001", email="not-an-email", name="Asha")
    assert "email" in exc_info.value.messages


def test_update_shipping_info():
    customer = Customer.register(user_id="user-001", email="asha@example.com", name="Asha")
    customer.update_shipping_info(address="12 MG Road", city="Bengaluru", postal_code="560001", country="India")

    assert customer.has_shipping_info
    assert customer.shipping_info.postal_code == "560001"
    assert isinstance(customer._events[-1], ShippingInfoUpdated)


def test_shipping_info_fields_are_required():
    customer = Customer.register(user_id="user-001", email="asha@example.com", name="Asha")
    with pytest.raises(ValidationError):
        customer.update_shipping_info(address="12 MG Road", city=None, postal_code="560001", country="India")
