"""Order placement — converts the customer's cart into an order.

All writes (stock decrements, the new order, cart removal) run in the
handler's unit of work; every validation happens before the first write.
"""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.cart.items import cart_for
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.order.order import Order, PaymentMethod, validate_payment
from storefront.order.stock import take_stock
from storefront.utils.queries import delete

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    payment_method = String(required=True, max_length=20)
    card_number = String(max_length=30)
    expiry_date = String(max_length=10)
    cvv = String(max_length=4)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = cart_for(command.user_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty. Please add items to your cart."]})

        try:
            customer = current_domain.repository_for(Customer).get(command.user_id)
        except ObjectNotFoundError:
            customer = None
        if customer is None or not customer.has_shipping_info:
            raise ValidationError({"shipping_info": ["Shipping information is required."]})

        payment_details = validate_payment(
            command.payment_method,
            card_number=command.card_number,
            expiry_date=command.expiry_date,
            cvv=command.cvv,
        )

        lines = cart.snapshot()
        take_stock(lines)

        info = customer.shipping_info
        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            payment_method=PaymentMethod(command.payment_method).value,
            payment_details=payment_details,
            shipping_address={
                "address": info.address,
                "city": info.city,
                "postal_code": info.postal_code,
                "country": info.country,
            },
        )
        current_domain.repository_for(Order).add(order)
        delete(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_price=order.total_price,
            line_count=len(lines),
        )
        return str(order.id)
