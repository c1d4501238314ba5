# pocketcashier/services/email_templates.py
from html import escape
from typing import Iterable, Tuple

DEFAULT_ORDER_PREFIX = "ORD-"


def display_order_id(order_id: str, prefix: str | None = None) -> str:
    return f"{prefix or DEFAULT_ORDER_PREFIX}{order_id[:8].upper()}"


def _dollars(cents: int | None) -> str:
    return f"${(cents or 0) / 100:.2f}"


def _items_list(items: Iterable[Tuple[str, int]]) -> str:
    return "".join(f"<li>{escape(name)} × {quantity}</li>" for name, quantity in items)


def customer_confirmation(customer_name: str, order_id: str, items: Iterable[Tuple[str, int]]) -> str:
    return (
        f"<h1>Thank you for your order, {escape(customer_name or 'Valued Customer')}!</h1>"
        f"<p>Your order #{escape(order_id[:8])} has been received and is being prepared.</p>"
        f"<h3>Order Details:</h3><ul>{_items_list(items)}</ul>"
        "<p>You will receive another email when your order is ready for pickup.</p>"
    )


def admin_new_order(customer_name: str, customer_email: str, order_id: str, items: Iterable[Tuple[str, int]]) -> str:
    return (
        "<h1>New Order Received!</h1>"
        f"<p><strong>Order ID:</strong> {escape(order_id[:8])}</p>"
        f"<p><strong>Customer:</strong> {escape(customer_name or '')}</p>"
        f"<p><strong>Email:</strong> {escape(customer_email)}</p>"
        f"<h3>Items Ordered:</h3><ul>{_items_list(items)}</ul>"
    )


def shop_order_summary(order, items, display_id: str, payment_id: str | None, heading: str) -> str:
    rows = "".join(
        f"<tr><td>{escape(i.product_name)}</td><td>x{i.quantity}</td>"
        f"<td>{_dollars(i.unit_price_cents)}</td></tr>"
        for i in items
    )
    footer = f"<p>Payment ID: {escape(payment_id)}</p>" if payment_id else ""
    return (
        f"<h1>{escape(heading)}</h1>"
        f"<p><strong>Order ID:</strong> {display_id}</p>"
        f"<p><strong>Customer:</strong> {escape(order.customer_name or 'Valued Customer')}</p>"
        f"<table><tr><th>Item</th><th>Qty</th><th>Price</th></tr>{rows}</table>"
        f"<p><strong>Subtotal:</strong> {_dollars(order.subtotal_cents)}</p>"
        f"<p><strong>Tax:</strong> {_dollars(order.tax_cents)}</p>"
        f"<p><strong>Total:</strong> {_dollars(order.total_cents)}</p>"
        f"{footer}"
    )


def _booking_rows(booking) -> str:
    rows = [
        ("Service", booking.service_type or "Appointment"),
        ("Date & Time", f"{booking.booking_date} ({booking.business_timezone})"),
    ]
    if booking.duration_minutes:
        rows.append(("Duration", f"{booking.duration_minutes} minutes"))
    if booking.notes:
        rows.append(("Notes", booking.notes))
    return "".join(f"<tr><td><strong>{label}:</strong></td><td>{escape(str(value))}</td></tr>" for label, value in rows)


def booking_confirmation(booking, business_name: str) -> str:
    return (
        "<h2>Booking Confirmation</h2>"
        f"<p>Hi {escape(booking.customer_name or 'there')},</p>"
        f"<p>Thank you for booking with <strong>{escape(business_name)}</strong>! Your booking has been confirmed.</p>"
        f"<table>{_booking_rows(booking)}</table>"
        "<p>If you need to reschedule or cancel, please contact the business directly.</p>"
    )


def admin_new_booking(booking, business_name: str) -> str:
    phone = f"<p><strong>Phone:</strong> {escape(booking.customer_phone)}</p>" if booking.customer_phone else ""
    return (
        "<h2>New Booking Request</h2>"
        f"<p>You have received a new booking at <strong>{escape(business_name)}</strong>.</p>"
        f"<p><strong>Name:</strong> {escape(booking.customer_name or '')}</p>"
        f"<p><strong>Email:</strong> {escape(booking.customer_email)}</p>"
        f"{phone}"
        f"<table>{_booking_rows(booking)}</table>"
    )
