# ==============================================================================
# EMAIL TEMPLATES - Vendetta Roasting Transactional Emails
# ==============================================================================
# Subject, HTML and plain-text bodies for order lifecycle emails
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Any, Dict, Iterable, Optional

from roastery.core.settings import settings
from roastery.domain_models.order import Order
from roastery.integrations.email import EmailMessage
from roastery.utils.helpers import format_money

BRAND = "Vendetta Roasting"

_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background-color: #8B4513; color: white; padding: 20px; text-align: center; }
    .content { background-color: #f9f9f9; padding: 30px; }
    .order-details { background-color: white; padding: 20px; margin: 20px 0; border-radius: 5px; }
    .item { display: flex; justify-content: space-between; padding: 10px 0; border-bottom: 1px solid #eee; }
    .total { font-weight: bold; font-size: 18px; color: #8B4513; }
    .footer { text-align: center; padding: 20px; color: #666; font-size: 14px; }
    .button { display: inline-block; background-color: #8B4513; color: white; padding: 12px 24px; text-decoration: none; border-radius: 5px; margin: 10px 0; }
"""


def order_url(order: Order) -> str:
    return f"{settings.SITE_URL}/orders/{order.order_number}"


def shop_url() -> str:
    return f"{settings.SITE_URL}/shop"


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%B %d, %Y").replace(" 0", " ") if value else ""


def _address_lines(address: Optional[Dict[str, Any]]) -> list[str]:
    if not address:
        return []
    city_state = ", ".join(
        part for part in (address.get("city"), address.get("state")) if part
    )
    locality = " ".join(part for part in (city_state, address.get("zipCode")) if part)
    return [
        line for line in (address.get("street"), locality, address.get("country"))
        if line
    ]


def _layout(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)} - {BRAND}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>&#9749; {BRAND}</h1>
      <h2>{escape(title)}</h2>
    </div>
    <div class="content">
{body}
    </div>
    <div class="footer">
      <p>{BRAND} - Premium Coffee Roasters</p>
      <p>This is an automated message. Please do not reply to this email.</p>
    </div>
  </div>
</body>
</html>
"""


def _item_rows(order: Order) -> Iterable[str]:
    for item in order.items:
        yield (
            f'<div class="item"><span>{escape(item.product_name)} &times; {item.quantity}</span>'
            f"<span>${format_money(item.total_price)}</span></div>"
        )


def _buttons(order: Order) -> str:
    return (
        '<div style="text-align: center;">'
        f'<a href="{escape(order_url(order))}" class="button">Track Your Order</a> '
        f'<a href="{escape(shop_url())}" class="button">Continue Shopping</a>'
        "</div>"
    )


def render_order_confirmation(
    order: Order,
    to: str,
    customer_name: str,
    estimated_delivery: datetime,
) -> EmailMessage:
    """Order confirmation with items, total and shipping address."""
    address = _address_lines(order.shipping_address)
    body = f"""
      <h3>Thank you for your order, {escape(customer_name)}!</h3>
      <p>We've received your order and will begin processing it shortly. Here are your order details:</p>
      <div class="order-details">
        <h4>Order Information</h4>
        <p><strong>Order ID:</strong> {escape(order.order_number)}</p>
        <p><strong>Order Date:</strong> {_format_date(order.created_at)}</p>
        <p><strong>Estimated Delivery:</strong> {_format_date(estimated_delivery)}</p>
        <h4>Items Ordered</h4>
        {''.join(_item_rows(order))}
        <div class="item total"><span>Total</span><span>${format_money(order.total_amount)}</span></div>
        <h4>Shipping Address</h4>
        <p>{'<br>'.join(escape(line) for line in address)}</p>
      </div>
      <p>We'll send you a tracking number once your order ships. If you have any questions, please don't hesitate to contact us.</p>
      {_buttons(order)}
"""
    item_lines = "\n".join(
        f"- {item.product_name} x {item.quantity} = ${format_money(item.total_price)}"
        for item in order.items
    )
    text = "\n".join([
        f"Order Confirmation - {BRAND}",
        "",
        f"Thank you for your order, {customer_name}!",
        "",
        f"Order ID: {order.order_number}",
        f"Order Date: {_format_date(order.created_at)}",
        f"Estimated Delivery: {_format_date(estimated_delivery)}",
        "",
        "Items Ordered:",
        item_lines,
        "",
        f"Total: ${format_money(order.total_amount)}",
        "",
        "Shipping Address:",
        *address,
        "",
        f"Track your order: {order_url(order)}",
        f"Continue shopping: {shop_url()}",
        "",
        f"Thank you for choosing {BRAND}!",
    ])
    return EmailMessage(
        to=to,
        subject=f"Order Confirmation #{order.order_number} - {BRAND}",
        html=_layout("Order Confirmation", body),
        text=text,
    )


def render_order_shipped(
    order: Order,
    to: str,
    customer_name: str,
    estimated_delivery: Optional[datetime],
) -> EmailMessage:
    """Shipping notice with tracking details when known."""
    tracking_html = ""
    tracking_text = []
    if order.tracking_number:
        number = escape(order.tracking_number)
        if order.tracking_url:
            number = f'<a href="{escape(order.tracking_url)}">{number}</a>'
        tracking_html = f"<p><strong>Tracking Number:</strong> {number}</p>"
        tracking_text.append(f"Tracking Number: {order.tracking_number}")
        if order.tracking_url:
            tracking_text.append(f"Track your package: {order.tracking_url}")

    body = f"""
      <h3>Good news, {escape(customer_name)}!</h3>
      <p>Your order is on its way.</p>
      <div class="order-details">
        <p><strong>Order ID:</strong> {escape(order.order_number)}</p>
        {tracking_html}
        <p><strong>Estimated Delivery:</strong> {_format_date(estimated_delivery)}</p>
      </div>
      {_buttons(order)}
"""
    text = "\n".join([
        f"Your Order Has Shipped - {BRAND}",
        "",
        f"Good news, {customer_name}! Your order is on its way.",
        "",
        f"Order ID: {order.order_number}",
        *tracking_text,
        f"Estimated Delivery: {_format_date(estimated_delivery)}",
        "",
        f"Order details: {order_url(order)}",
    ])
    return EmailMessage(
        to=to,
        subject=f"Your Order #{order.order_number} Has Shipped - {BRAND}",
        html=_layout("Your Order Has Shipped", body),
        text=text,
    )


def render_order_delivered(order: Order, to: str, customer_name: str) -> EmailMessage:
    body = f"""
      <h3>Enjoy your coffee, {escape(customer_name)}!</h3>
      <p>Your order <strong>{escape(order.order_number)}</strong> has been delivered.</p>
      <p>If anything is not right with your order, just let us know.</p>
      {_buttons(order)}
"""
    text = "\n".join([
        f"Your Order Has Been Delivered - {BRAND}",
        "",
        f"Enjoy your coffee, {customer_name}!",
        f"Your order {order.order_number} has been delivered.",
        "",
        f"Order details: {order_url(order)}",
        f"Continue shopping: {shop_url()}",
    ])
    return EmailMessage(
        to=to,
        subject=f"Your Order #{order.order_number} Has Been Delivered - {BRAND}",
        html=_layout("Your Order Has Been Delivered", body),
        text=text,
    )


def render_review_request(order: Order, to: str, customer_name: str) -> EmailMessage:
    """Asks for a product review, linking each purchased product."""
    product_links = [
        (item.product_name, f"{settings.SITE_URL}/products/{item.product_id}#reviews")
        for item in order.items
        if item.product_id
    ]
    links_html = "".join(
        f'<li><a href="{escape(url)}">{escape(name)}</a></li>'
        for name, url in product_links
    )
    body = f"""
      <h3>How was your coffee, {escape(customer_name)}?</h3>
      <p>Thank you for order <strong>{escape(order.order_number)}</strong>. We'd love to hear what you think.</p>
      <ul>{links_html}</ul>
      <p>Your review helps other coffee lovers find their next favorite roast.</p>
      {_buttons(order)}
"""
    text = "\n".join([
        f"Share Your Thoughts - {BRAND}",
        "",
        f"How was your coffee, {customer_name}?",
        f"Thank you for order {order.order_number}. We'd love to hear what you think.",
        "",
        *(f"- {name}: {url}" for name, url in product_links),
        "",
        f"Continue shopping: {shop_url()}",
    ])
    return EmailMessage(
        to=to,
        subject=f"How was your order? - {BRAND}",
        html=_layout("Share Your Thoughts", body),
        text=text,
    )
