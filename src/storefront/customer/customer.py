"""Customer aggregate — the storefront's view of an authenticated user.

Identity is issued by the external identity provider; the storefront keeps
only what order placement needs: contact email, display name, role and the
default shipping information copied onto each order.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, ValueObject

from storefront.customer.events import CustomerRegistered, ShippingInfoUpdated
from storefront.domain import storefront


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@storefront.value_object(part_of="Customer")
class ShippingInfo:
    """Default delivery address of a customer."""

    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.aggregate
class Customer:
    user_id = Identifier(identifier=True, required=True)
    email = String(required=True, max_length=254)
    name = String(required=True, max_length=100)
    role = String(choices=Role, default=Role.USER.value)
    shipping_info = ValueObject(ShippingInfo)
    registered_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, user_id, email, name, role=Role.USER.value):
        if "@" not in (email or ""):
            raise ValidationError({"email": ["Please enter a valid email address"]})

        now = datetime.now(UTC)
        customer = cls(
            user_id=user_id,
            email=email,
            name=name,
            role=role,
            registered_at=now,
            updated_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                user_id=str(user_id),
                email=email,
                name=name,
                role=role,
                registered_at=now,
            )
        )
        return customer

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    @property
    def has_shipping_info(self):
        return self.shipping_info is not None

    def update_shipping_info(self, address, city, postal_code, country):
        self.shipping_info = ShippingInfo(
            address=address,
            city=city,
            postal_code=postal_code,
            country=country,
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ShippingInfoUpdated(
                user_id=str(self.user_id),
                address=address,
                city=city,
                postal_code=postal_code,
                country=country,
            )
        )
