# pocketcashier/services/payment_service.py
from datetime import datetime, timezone
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocketcashier.domain.exceptions import ValidationError, NotFoundError, ConfigError, UpstreamError
from pocketcashier.domain.schemas import ProcessShopPaymentIn
from pocketcashier.repos.business_repo import BusinessRepo
from pocketcashier.repos.order_repo import OrderRepo
from pocketcashier.services.notification_service import NotificationService
from pocketcashier.services.square_client import SquareClient
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)

SQUARE_COMPLETED = "COMPLETED"


def next_order_status(current: str, provider_status: str | None) -> str:
    """draft -> pending/paid, z paid nie ma powrotu."""
    if current == "paid" or provider_status == SQUARE_COMPLETED:
        return "paid"
    return "pending"


class PaymentService:
    def __init__(self, db: Session, square: SquareClient, notifier: NotificationService):
        self.order_repo = OrderRepo(db)
        self.business_repo = BusinessRepo(db)
        self.square = square
        self.notifier = notifier

    def charge(self, payload: ProcessShopPaymentIn) -> Dict[str, Any]:
        """
        Use Case: platnosc za zamowienie sklepowe.

        1. Walidacja, zamowienie musi istniec i miec pozycje (paid: zwracamy zapisany payment)
        2. Location id biznesu (ConfigError gdy brak)
        3. Charge w Square z idempotency key klienta
        4. Update statusu + payment id
        5. Powiadomienie (best-effort, nie wplywa na odpowiedz)
        """
        if not payload.business_id or not payload.order_id or not payload.total_cents or not payload.source_id:
            raise ValidationError("Missing required fields")

        order = self.order_repo.get_order(payload.order_id)
        if not order or order.business_id != payload.business_id:
            raise NotFoundError("Order not found")

        # paid nie ma przejsc wyjsciowych, payment id zostaje do rekonsyliacji
        if order.status == "paid":
            logger.info(f"Order {order.id} already paid with {order.square_payment_id}, not charging again")
            return {"success": True, "paymentId": order.square_payment_id, "status": "completed"}

        # zamowienie bez pozycji jest niepoprawne, nie moze zostac oplacone
        if self.order_repo.count_order_items(order.id) == 0:
            raise ValidationError("Order has no items")

        idempotency_key = payload.idempotency_key or order.idempotency_key
        if not idempotency_key:
            raise ValidationError("idempotencyKey is required")

        business = self.business_repo.get_business(payload.business_id)
        if not business or not business.square_location_id:
            raise ConfigError("Business Square configuration incomplete")

        if payload.total_cents != order.total_cents:
            logger.warning(
                f"Charge amount mismatch for order {order.id}: "
                f"client sent {payload.total_cents}, order total is {order.total_cents}"
            )

        logger.info(f"Processing Square payment for shop order {order.id}")

        payment = self.square.create_payment(
            source_id=payload.source_id,
            amount_cents=payload.total_cents,
            location_id=business.square_location_id,
            idempotency_key=idempotency_key,
            reference_id=order.id,
            note=f"Shop Order {order.id}",
            buyer_email=payload.buyer_email,
        )

        payment_id = payment.get("id")
        provider_status = payment.get("status")
        now = datetime.now(timezone.utc)

        new_status = next_order_status(order.status, provider_status)
        if new_status == "paid" and order.paid_at is None:
            order.paid_at = now
        order.status = new_status
        order.square_payment_id = payment_id
        order.updated_at = now

        try:
            self.order_repo.save(order)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update order {order.id} after payment {payment_id}: {e}")
            raise UpstreamError(f"Failed to update order: {e}")

        logger.info(f"Order {order.id} is {new_status} (square status {provider_status}, payment {payment_id})")

        self.notifier.order_paid(order.id, payload.business_id, payment_id)

        return {
            "success": True,
            "paymentId": payment_id,
            "status": "completed" if provider_status == SQUARE_COMPLETED else "pending",
        }
