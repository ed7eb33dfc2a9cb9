"""Email templates for order notifications.

Each template renders ``{"subject", "body", "html_body"}`` from a context
dict built by the order event handler.
"""

from storefront.notification.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notification.templates.status_update import OrderStatusUpdateTemplate

__all__ = ["OrderConfirmationTemplate", "OrderStatusUpdateTemplate"]
