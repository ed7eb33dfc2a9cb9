"""Order confirmation template — sent when an order is placed."""

from html import escape

from storefront.notification.templates.summary import html_summary, text_summary


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        name = context.get("customer_name", "Customer")
        store = context.get("store_name", "Storefront")
        items = context.get("items", [])
        shipping_fee = context.get("shipping_fee", 0)
        total = context.get("total_price", 0)
        return {
            "subject": "Order Confirmation",
            "body": (
                f"Hi {name},\n\n"
                f"Thank you for your order #{order_id}.\n\n"
                f"{text_summary(items, shipping_fee, total)}\n\n"
                f"Thank you for shopping with {store}!"
            ),
            "html_body": (
                f"<h2>Thank you for your order, {escape(name)}!</h2>"
                f"<p>Order #{escape(order_id)}</p>"
                f"{html_summary(items, shipping_fee, total)}"
                f"<p>Thank you for shopping with {escape(store)}!</p>"
            ),
        }
