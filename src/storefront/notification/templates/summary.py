"""Line-item summary shared by the order email templates."""

from html import escape


def _money(value) -> str:
    return f"{float(value):.2f}"


def text_summary(items: list[dict], shipping_fee, total_price) -> str:
    lines = [
        f"- {item['name']}{' (' + item['color'] + ')' if item.get('color') else ''}"
        f" x {item['quantity']} @ {_money(item['price'])}"
        for item in items
    ]
    lines.append(f"Shipping: {_money(shipping_fee)}")
    lines.append(f"Total: {_money(total_price)}")
    return "\n".join(lines)


def html_summary(items: list[dict], shipping_fee, total_price) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{escape(item['name'])}</td>"
        f"<td>{escape(item.get('color') or '-')}</td>"
        f"<td>{item['quantity']}</td>"
        f"<td>{_money(item['price'])}</td>"
        "</tr>"
        for item in items
    )
    return (
        "<table>"
        "<thead><tr><th>Product</th><th>Color</th><th>Quantity</th><th>Price</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
        f"<p>Shipping: {_money(shipping_fee)}</p>"
        f"<p><strong>Total: {_money(total_price)}</strong></p>"
    )
