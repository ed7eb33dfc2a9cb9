"""Customer registration and shipping profile — commands and handler."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.customer.customer import Customer, Role
from storefront.domain import storefront
from storefront.utils.queries import fetch_one


@storefront.command(part_of="Customer")
class RegisterCustomer:
    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    name = String(required=True, max_length=100)
    role = String(choices=Role, default=Role.USER.value)


@storefront.command(part_of="Customer")
class UpdateShippingInfo:
    user_id = Identifier(required=True)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.command_handler(part_of=Customer)
class CustomerManagementHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        if fetch_one(Customer, email=command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})

        customer = Customer.register(
            user_id=command.user_id,
            email=command.email,
            name=command.name,
            role=command.role or Role.USER.value,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.user_id)

    @handle(UpdateShippingInfo)
    def update_shipping_info(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.user_id)
        customer.update_shipping_info(
            address=command.address,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        repo.add(customer)
