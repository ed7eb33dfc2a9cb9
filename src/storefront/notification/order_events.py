"""Order email notifications — reacts to Order events after they commit.

Sending is best-effort: a failed or raising adapter is logged and never
affects the order. Customers get a confirmation when an order is placed and
an update when it is Shipped or Delivered.
"""

import json
import os

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.notification.channel import get_email_channel
from storefront.notification.templates import OrderConfirmationTemplate, OrderStatusUpdateTemplate
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import NOTIFIABLE_STATUSES, SHIPPING_FEE, Order, OrderStatus
from storefront.product.product import Product

logger = structlog.get_logger(__name__)

UNKNOWN_PRODUCT_NAME = "Unavailable product"


def _named_items(items_json):
    """Attach product names to event line items."""
    repo = current_domain.repository_for(Product)
    items = json.loads(items_json) if items_json else []
    for item in items:
        try:
            item["name"] = repo.get(item["product_id"]).name
        except ObjectNotFoundError:
            item["name"] = UNKNOWN_PRODUCT_NAME
    return items


def send_order_email(template, user_id, items_json, context):
    """Render ``template`` with named line items and mail it to the customer.

    Returns True when the adapter reports the message as sent.
    """
    try:
        customer = current_domain.repository_for(Customer).get(user_id)
    except ObjectNotFoundError:
        logger.warning("order_email_skipped", user_id=str(user_id), reason="customer not found")
        return False

    context = {
        **context,
        "customer_name": customer.name,
        "store_name": os.getenv("STORE_NAME", "Storefront"),
    }

    try:
        context["items"] = _named_items(items_json)
        content = template.render(context)
        result = get_email_channel().send(
            to=customer.email,
            subject=content["subject"],
            body=content["body"],
            html_body=content.get("html_body"),
        )
    except Exception as exc:
        logger.error(
            "order_email_failed",
            order_id=context.get("order_id"),
            to=customer.email,
            error=str(exc),
            exc_info=True,
        )
        return False

    if not result.sent:
        logger.error(
            "order_email_failed",
            order_id=context.get("order_id"),
            to=customer.email,
            error=result.error,
        )
        return False

    logger.info(
        "order_email_sent",
        order_id=context.get("order_id"),
        to=customer.email,
        message_id=result.message_id,
    )
    return True


@storefront.event_handler(part_of=Order)
class OrderEmailHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        send_order_email(
            OrderConfirmationTemplate,
            event.user_id,
            event.items,
            {
                "order_id": str(event.order_id),
                "shipping_fee": event.shipping_fee,
                "total_price": event.total_price,
            },
        )

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        if OrderStatus(event.new_status) not in NOTIFIABLE_STATUSES:
            return

        send_order_email(
            OrderStatusUpdateTemplate,
            event.user_id,
            event.items,
            {
                "order_id": str(event.order_id),
                "status": event.new_status,
                "shipping_fee": SHIPPING_FEE,
                "total_price": event.total_price,
            },
        )
