# pocketcashier/services/order_service.py
from typing import Iterable, Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocketcashier.data.models.order import ShopOrderModel
from pocketcashier.data.models.order_item import ShopOrderItemModel
from pocketcashier.domain.exceptions import ValidationError, UpstreamError
from pocketcashier.domain.schemas import CreateShopOrderIn, OrderItemIn
from pocketcashier.repos.order_repo import OrderRepo
from pocketcashier.services.notification_service import NotificationService
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Zamowienie sklepowe tworzone ze snapshotu koszyka.
    Status draft, platnosc jest osobnym krokiem (PaymentService).
    """

    def __init__(self, db: Session, notifier: NotificationService):
        self.repo = OrderRepo(db)
        self.notifier = notifier

    def create_order(self, payload: CreateShopOrderIn) -> Dict[str, Any]:
        """
        Use Case: tworzenie zamowienia.

        1. Walidacja (business, email, niepusta lista pozycji)
        2. Zamowienie + pozycje w jednej transakcji
        3. Opcjonalnie lead do MailerLite (best-effort)
        """
        if not payload.business_id or not payload.customer_email or not payload.items:
            raise ValidationError("Missing required fields")

        order_items = self._build_items(payload.items)

        line_sum = sum(i.line_total_cents for i in order_items)
        if line_sum != payload.subtotal_cents:
            logger.warning(
                f"Subtotal mismatch for business {payload.business_id}: "
                f"client sent {payload.subtotal_cents}, items sum to {line_sum}"
            )

        order = ShopOrderModel(
            business_id=payload.business_id,
            customer_name=payload.customer_name,
            customer_email=payload.customer_email,
            customer_phone=payload.customer_phone or None,
            status="draft",
            subtotal_cents=payload.subtotal_cents,
            tax_cents=payload.tax_cents,
            shipping_cents=payload.shipping_cents,
            total_cents=payload.total_cents,
            idempotency_key=payload.idempotency_key,
        )

        try:
            created = self.repo.create_order(order, order_items)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create order for business {payload.business_id}: {e}")
            raise UpstreamError(f"Failed to create order: {e}")

        logger.info(f"Order {created.id} created as draft with {len(order_items)} item(s)")

        if payload.join_newsletter:
            self.notifier.capture_lead(
                business_id=payload.business_id,
                customer_email=payload.customer_email,
                customer_name=payload.customer_name,
            )

        return {"orderId": created.id, "status": created.status}

    @staticmethod
    def _build_items(items: Iterable[OrderItemIn]) -> list[ShopOrderItemModel]:
        built = []
        for item in items:
            if item.quantity is None or item.quantity <= 0:
                raise ValidationError("Each item must have a quantity greater than 0")
            if item.unit_price_cents is None or item.unit_price_cents < 0:
                raise ValidationError("Each item must have a unit price")

            built.append(
                ShopOrderItemModel(
                    product_id=item.product_id,
                    product_name=item.product_name or "Item",
                    unit_price_cents=item.unit_price_cents,
                    quantity=item.quantity,
                    line_total_cents=item.unit_price_cents * item.quantity,
                )
            )
        return built
