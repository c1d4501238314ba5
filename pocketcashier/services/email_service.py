# pocketcashier/services/email_service.py
from typing import Dict, Any

from requests import RequestException
from sqlalchemy.orm import Session

from pocketcashier.domain.exceptions import ValidationError, NotFoundError, UpstreamError
from pocketcashier.domain.schemas import SendOrderEmailIn
from pocketcashier.repos.business_repo import BusinessRepo
from pocketcashier.repos.checkout_repo import CheckoutRepo
from pocketcashier.repos.order_repo import OrderRepo
from pocketcashier.services import email_templates
from pocketcashier.services.email_client import ResendClient
from pocketcashier.services.mailerlite_client import MailerLiteClient
from pocketcashier.utils.settings import Settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)

NOT_CONFIGURED = {"success": False, "message": "Email service not configured"}


class EmailService:
    """
    Wysylka maili (Resend) i leadow (MailerLite).
    Brak klucza API to nie blad, tylko no-op z logiem.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        resend: ResendClient | None = None,
        mailerlite: MailerLiteClient | None = None,
    ):
        self.business_repo = BusinessRepo(db)
        self.order_repo = OrderRepo(db)
        self.checkout_repo = CheckoutRepo(db)
        self.resend = resend or ResendClient(settings)
        self.mailerlite = mailerlite or MailerLiteClient(settings)

    def send_order_email(self, payload: SendOrderEmailIn) -> Dict[str, Any]:
        if not self.resend.configured:
            logger.info("RESEND_API_KEY not configured, skipping email")
            return dict(NOT_CONFIGURED)

        if not payload.order_id or not payload.customer_email:
            raise ValidationError("orderId and customerEmail are required")

        items = [(i.name, i.quantity) for i in payload.items]
        emails = [(
            payload.customer_email,
            "Order Confirmation",
            email_templates.customer_confirmation(payload.customer_name, payload.order_id, items),
        )]

        admin_email = self._admin_email(payload.business_id)
        if admin_email:
            emails.append((
                admin_email,
                "New Order Received",
                email_templates.admin_new_order(
                    payload.customer_name, payload.customer_email, payload.order_id, items
                ),
            ))

        for to, subject, html in emails:
            self.resend.send(to, subject, html)

        logger.info(f"Order {payload.order_id} emails sent ({len(emails)})")
        return {"success": True}

    def send_shop_order_email(self, order_id: str, business_id: str, payment_id: str | None = None) -> Dict[str, Any]:
        """
        Potwierdzenie po platnosci: klient + admin (jesli ustawiony).
        Bledy pojedynczej wysylki sa logowane, reszta leci dalej.
        """
        if not self.resend.configured:
            logger.info(f"RESEND_API_KEY not configured, skipping confirmation for order {order_id}")
            return dict(NOT_CONFIGURED)

        order = self.order_repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        items = self.order_repo.get_order_items(order_id)
        settings = self.business_repo.get_settings(business_id)
        display_id = email_templates.display_order_id(order_id, settings.order_prefix if settings else None)

        emails = [(
            order.customer_email,
            f"Order Confirmation - {display_id}",
            email_templates.shop_order_summary(order, items, display_id, payment_id, "Order Confirmation"),
        )]
        if settings and settings.admin_email:
            emails.append((
                settings.admin_email,
                f"New Shop Order - {display_id}",
                email_templates.shop_order_summary(order, items, display_id, None, "New Shop Order"),
            ))

        return {"success": True, "sent": self._send_all(emails)}

    def send_booking_confirmation(self, booking_id: str) -> Dict[str, Any]:
        """Potwierdzenie bookingu z checkoutu: klient + admin (jesli ustawiony)."""
        if not self.resend.configured:
            logger.info(f"RESEND_API_KEY not configured, skipping confirmation for booking {booking_id}")
            return dict(NOT_CONFIGURED)

        booking = self.checkout_repo.get_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")

        business = self.business_repo.get_business(booking.business_id)
        business_name = business.name if business else "our business"
        admin_email = self._admin_email(booking.business_id)

        emails = [(
            booking.customer_email,
            f"Booking Confirmation - {business_name}",
            email_templates.booking_confirmation(booking, business_name),
        )]
        if admin_email:
            emails.append((
                admin_email,
                f"New Booking Request - {booking.customer_name or booking.customer_email}",
                email_templates.admin_new_booking(booking, business_name),
            ))

        return {"success": True, "sent": self._send_all(emails)}

    def capture_lead(self, business_id: str | None, customer_email: str | None, customer_name: str | None) -> Dict[str, Any]:
        if not business_id or not customer_email:
            raise ValidationError("businessId and customerEmail are required")

        settings = self.business_repo.get_settings(business_id)
        if not settings or not settings.mailerlite_enabled or not settings.mailerlite_api_key:
            logger.info(f"MailerLite not configured or not enabled for business {business_id}")
            return {"success": False, "message": "MailerLite not configured"}

        try:
            resp = self.mailerlite.add_subscriber(
                settings.mailerlite_api_key,
                customer_email,
                customer_name,
                settings.mailerlite_group_id,
            )
        except RequestException as e:
            raise UpstreamError(f"MailerLite request failed: {e}")

        if not resp.ok:
            logger.error(f"MailerLite API error ({resp.status_code}): {resp.text}")
            raise UpstreamError(resp.text or f"MailerLite returned {resp.status_code}")

        try:
            data = resp.json() if resp.content else None
        except ValueError:
            data = None

        logger.info(f"MailerLite subscriber {customer_email} added for business {business_id}")
        return {"success": True, "data": data}

    def _send_all(self, emails) -> int:
        # bledy pojedynczej wysylki tylko logowane
        sent = 0
        for to, subject, html in emails:
            try:
                self.resend.send(to, subject, html)
                sent += 1
            except UpstreamError as e:
                logger.error(f"Failed to send {subject!r} to {to}: {e}")
        return sent

    def _admin_email(self, business_id: str | None) -> str | None:
        if not business_id:
            return None
        settings = self.business_repo.get_settings(business_id)
        return settings.admin_email if settings else None
