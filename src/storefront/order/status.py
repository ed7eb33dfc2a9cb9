"""Order status transitions — admin updates, customer cancel/complete, deletion."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus, admin_status
from storefront.order.stock import return_stock
from storefront.utils.queries import delete

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    note = String(max_length=500)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    note = String(max_length=500)


@storefront.command(part_of="Order")
class CompleteOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


def _load(order_id, user_id=None):
    """Fetch an order, optionally requiring that ``user_id`` owns it."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"order": ["Order not found."]}) from None
    if user_id is not None and str(order.user_id) != str(user_id):
        raise ObjectNotFoundError({"order": ["Order not found."]})
    return order


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        admin_status(command.status)
        order = _load(command.order_id)
        previous = order.status
        to_restore = order.change_status(command.status, command.note)
        return_stock(to_restore)
        current_domain.repository_for(Order).add(order)

        if previous == OrderStatus.CANCELLED.value and order.status != previous and order.stock_restored:
            logger.warning(
                "order_reopened_without_stock",
                order_id=str(order.id),
                new_status=order.status,
                reason="stock was returned on cancellation and is not taken again",
            )

        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            lines_restored=len(to_restore),
        )

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = _load(command.order_id, user_id=command.user_id)
        to_restore = order.cancel_by_customer(command.note)
        return_stock(to_restore)
        current_domain.repository_for(Order).add(order)

        logger.info("order_cancelled_by_customer", order_id=str(order.id), user_id=str(command.user_id))

    @handle(CompleteOrder)
    def complete_order(self, command):
        order = _load(command.order_id, user_id=command.user_id)
        order.complete()
        current_domain.repository_for(Order).add(order)

    @handle(DeleteOrder)
    def delete_order(self, command):
        order = _load(command.order_id)
        delete(order)
        logger.info("order_deleted", order_id=str(command.order_id))
