# pocketcashier/services/checkout_service.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocketcashier.data.models.booking import BookingModel
from pocketcashier.data.models.checkout_session import CheckoutSessionModel
from pocketcashier.data.models.order import ShopOrderModel
from pocketcashier.data.models.order_item import ShopOrderItemModel
from pocketcashier.domain.exceptions import ShopError, ValidationError, NotFoundError, ConfigError, UpstreamError
from pocketcashier.domain.schemas import CreateCheckoutIn
from pocketcashier.repos.business_repo import BusinessRepo
from pocketcashier.repos.cart_repo import CartRepo
from pocketcashier.repos.checkout_repo import CheckoutRepo
from pocketcashier.services.cart_service import dollars_to_cents
from pocketcashier.services.notification_service import NotificationService
from pocketcashier.services.payment_service import SQUARE_COMPLETED
from pocketcashier.services.square_client import SquareClient
from pocketcashier.utils.settings import Settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


def _tax(cents: int, rate: float) -> int:
    return int((Decimal(cents) * Decimal(str(rate))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _duration_minutes(start: str, end: str) -> int | None:
    try:
        delta = _parse_iso(end) - _parse_iso(start)
    except (TypeError, ValueError):
        return None
    return round(delta.total_seconds() / 60)


class CheckoutService:
    """
    Checkout calego koszyka jedna platnoscia: produkty -> shop order, booking -> bookings.
    Kwoty liczone z tego co zapisane w koszyku, nigdy z body requestu.
    """

    def __init__(self, db: Session, settings: Settings, square: SquareClient, notifier: NotificationService):
        self.cart_repo = CartRepo(db)
        self.business_repo = BusinessRepo(db)
        self.checkout_repo = CheckoutRepo(db)
        self.settings = settings
        self.square = square
        self.notifier = notifier

    def checkout(self, payload: CreateCheckoutIn) -> Dict[str, Any]:
        """
        Use Case: checkout koszyka.

        1. Walidacja, aktywny nieprzeterminowany koszyk, niepusty
        2. Sumy: pozycje + cena uslugi z bookingu, podatek osobno dla kazdej czesci
        3. Checkout session (processing) -> charge w Square
        4. Blad Square: sesja failed, blad do klienta
        5. W jednej transakcji: sesja paid/pending, koszyk checked_out, zamowienie, booking
        6. Powiadomienia (best-effort)
        """
        if not all([payload.session_token, payload.customer_name, payload.customer_email, payload.source_id]):
            raise ValidationError("Missing required fields")

        now = datetime.now(timezone.utc)
        cart = self.cart_repo.find_active_cart(payload.session_token, not_expired_at=now)
        if not cart:
            raise NotFoundError("Cart not found or expired")

        if payload.business_id and cart.business_id != payload.business_id:
            raise ValidationError("Cart belongs to a different business")

        items = self.cart_repo.get_cart_items(cart.id)
        cart_booking = self.cart_repo.get_booking(cart.id)
        if not items and not cart_booking:
            raise ValidationError("Cart is empty")

        business = self.business_repo.get_business(cart.business_id)
        if not business or not business.square_location_id:
            raise ConfigError("Business Square configuration incomplete")

        if self.checkout_repo.find_paid_session(cart.id):
            raise ValidationError("This cart has already been checked out")

        service = None
        if cart_booking:
            service = self.cart_repo.get_menu_item(cart.business_id, cart_booking.service_id)
            if not service:
                raise NotFoundError("Service not found")

        rate = self.settings.checkout_tax_rate
        items_subtotal = sum(i.unit_price_cents * i.quantity for i in items)
        items_tax = _tax(items_subtotal, rate)
        service_cents = dollars_to_cents(service.price) if service else 0
        service_tax = _tax(service_cents, rate)
        total_cents = items_subtotal + items_tax + service_cents + service_tax

        idempotency_key = payload.idempotency_key or f"checkout-{cart.id}-{uuid.uuid4().hex[:8]}"

        session = self.checkout_repo.create_session(
            CheckoutSessionModel(
                cart_id=cart.id,
                business_id=cart.business_id,
                square_location_id=business.square_location_id,
                idempotency_key=idempotency_key,
                amount_total_cents=total_cents,
                currency="USD",
                status="processing",
            )
        )
        logger.info(f"Checkout session {session.id} for cart {cart.id}, charging {total_cents} cents")

        try:
            payment = self.square.create_payment(
                source_id=payload.source_id,
                amount_cents=total_cents,
                location_id=business.square_location_id,
                idempotency_key=idempotency_key,
                reference_id=session.id,
                note=f"Checkout - Cart {cart.id}",
                buyer_email=payload.customer_email,
            )
        except ShopError as e:
            session.status = "failed"
            session.error_message = e.message
            self.checkout_repo.save_session(session)
            logger.error(f"Checkout session {session.id} failed: {e.message}")
            raise

        payment_id = payment.get("id")
        completed = payment.get("status") == SQUARE_COMPLETED
        status = "paid" if completed else "pending"
        paid_at = now if completed else None

        session.status = status
        session.square_payment_id = payment_id
        session.paid_at = paid_at

        cart.status = "checked_out"
        cart.customer_name = payload.customer_name
        cart.customer_email = payload.customer_email
        cart.customer_phone = payload.customer_phone or None
        cart.updated_at = now

        order = None
        order_items = []
        if items:
            order = ShopOrderModel(
                business_id=cart.business_id,
                customer_name=payload.customer_name,
                customer_email=payload.customer_email,
                customer_phone=payload.customer_phone or None,
                status=status,
                subtotal_cents=items_subtotal,
                tax_cents=items_tax,
                total_cents=items_subtotal + items_tax,
                idempotency_key=idempotency_key,
                square_payment_id=payment_id,
                paid_at=paid_at,
            )
            order_items = [
                ShopOrderItemModel(
                    product_id=i.product_id or i.service_id,
                    product_name=i.title_snapshot or "Item",
                    unit_price_cents=i.unit_price_cents,
                    quantity=i.quantity,
                    line_total_cents=i.unit_price_cents * i.quantity,
                )
                for i in items
            ]

        booking = None
        if cart_booking:
            booking = BookingModel(
                business_id=cart.business_id,
                menu_item_id=service.id,
                service_type=service.name or "Service",
                customer_name=cart_booking.customer_name or payload.customer_name,
                customer_email=payload.customer_email,
                customer_phone=cart_booking.customer_phone or payload.customer_phone or None,
                booking_date=cart_booking.start_time,
                duration_minutes=_duration_minutes(cart_booking.start_time, cart_booking.end_time),
                business_timezone=cart_booking.timezone,
                notes=cart_booking.notes,
                status="confirmed",
                payment_amount_cents=service_cents + service_tax,
                payment_status=status,
                payment_id=payment_id,
                idempotency_key=f"{idempotency_key}-booking",
            )
            cart_booking.status = "confirmed"

        try:
            self.checkout_repo.finalize(session, order, order_items, booking)
        except SQLAlchemyError as e:
            # platnosc juz przeszla, sesja zostaje processing do rekonsyliacji
            logger.error(f"Checkout session {session.id} charged as {payment_id} but not saved: {e}")
            raise UpstreamError(f"Failed to save checkout: {e}")

        logger.info(
            f"Checkout session {session.id} is {status} (payment {payment_id}), "
            f"order {order.id if order else None}, booking {booking.id if booking else None}"
        )

        if order:
            self.notifier.order_paid(order.id, cart.business_id, payment_id)
        if booking:
            self.notifier.booking_confirmed(booking.id)

        return {
            "success": True,
            "checkoutSessionId": session.id,
            "squarePaymentId": payment_id,
            "status": "completed" if completed else "pending",
            "shopOrderId": order.id if order else None,
            "bookingId": booking.id if booking else None,
        }
