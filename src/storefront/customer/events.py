"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    name = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="Customer")
class ShippingInfoUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    address = String(required=True)
    city = String(required=True)
    postal_code = String(required=True)
    country = String(required=True)
