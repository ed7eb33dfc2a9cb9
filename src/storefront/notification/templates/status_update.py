"""Order status update template — sent when an order ships or is delivered."""

from html import escape

from storefront.notification.templates.summary import html_summary, text_summary


class OrderStatusUpdateTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        status = context.get("status", "Updated")
        name = context.get("customer_name", "Customer")
        store = context.get("store_name", "Storefront")
        items = context.get("items", [])
        shipping_fee = context.get("shipping_fee", 0)
        total = context.get("total_price", 0)
        return {
            "subject": f"Your Order Status: {status}",
            "body": (
                f"Hi {name},\n\n"
                f"Your order #{order_id} is now {status}.\n\n"
                f"{text_summary(items, shipping_fee, total)}\n\n"
                f"Thank you for shopping with {store}!"
            ),
            "html_body": (
                f"<h2>Your order is {escape(status)}</h2>"
                f"<p>Hi {escape(name)}, your order #{escape(order_id)} is now {escape(status)}.</p>"
                f"{html_summary(items, shipping_fee, total)}"
                f"<p>Thank you for shopping with {escape(store)}!</p>"
            ),
        }
