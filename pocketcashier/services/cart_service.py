import uuid
from datetime import datetime, timezone, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any

from sqlalchemy.orm import Session

from pocketcashier.data.models.cart import CartModel
from pocketcashier.data.models.cart_item import CartItemModel
from pocketcashier.data.models.cart_booking import CartBookingModel
from pocketcashier.domain.exceptions import ValidationError, NotFoundError
from pocketcashier.repos.cart_repo import CartRepo
from pocketcashier.utils.settings import Settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)

ITEM_TYPES = ("product", "service")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def dollars_to_cents(price) -> int:
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class CartService:
    """
    Use case'y koszyka: get-or-create, add/update/remove item, booking, clear.
    Koszyk jest identyfikowany przez session token klienta, nie przez usera.
    Kazde wywolanie jest niezalezne, stan tylko w bazie.
    """

    def __init__(self, db: Session, settings: Settings):
        self.repo = CartRepo(db)
        self.settings = settings

    #query
    def get_cart_contents(self, cart: CartModel) -> Dict[str, Any]:
        return {
            "cart": cart,
            "items": self.repo.get_cart_items(cart.id),
            "booking": self.repo.get_booking(cart.id),
        }

    #commands
    def get_or_create(self, business_id: str | None, session_token: str | None = None) -> Dict[str, Any]:
        if not business_id:
            raise ValidationError("businessId is required")

        token = session_token or str(uuid.uuid4())
        cart = self.repo.find_active_cart(token, business_id=business_id, not_expired_at=_now())

        if cart:
            logger.info(f"Reusing active cart {cart.id} for business {business_id}")
        else:
            # brak guardu, dwa rownolegle requesty moga utworzyc dwa koszyki
            cart = self._create_cart(business_id, token)

        return self.get_cart_contents(cart)

    def add_item(
        self,
        session_token: str | None,
        business_id: str | None,
        item_type: str | None,
        item_id: str | None,
        quantity: int | None,
    ) -> str:
        if not session_token or not business_id or not item_type or not item_id or not quantity:
            raise ValidationError("Missing required fields")

        if not _is_positive_int(quantity):
            raise ValidationError("Quantity must be greater than 0")

        if item_type not in ITEM_TYPES:
            raise ValidationError(f"itemType must be one of: {', '.join(ITEM_TYPES)}")

        cart = self._get_or_create_for_token(session_token, business_id)

        if cart.business_id != business_id:
            raise ValidationError("Cannot mix items from different businesses. Please clear your cart first.")

        if item_type == "product":
            product = self.repo.get_product(business_id, item_id)
            if not product:
                raise NotFoundError("Product not found or inactive")
            unit_price_cents = product.price_cents
            title = product.name
        else:
            service = self.repo.get_menu_item(business_id, item_id)
            if not service:
                raise NotFoundError("Service not found")
            unit_price_cents = dollars_to_cents(service.price)
            title = service.name

        existing_item = self.repo.find_cart_item_for(cart.id, item_type, item_id)

        if existing_item:
            new_quantity = existing_item.quantity + quantity
            logger.info(
                f"Item {item_id} already in cart {cart.id}, quantity "
                f"{existing_item.quantity} -> {new_quantity}"
            )
            existing_item.quantity = new_quantity
            existing_item.line_total_cents = new_quantity * unit_price_cents
        else:
            logger.info(f"Adding {item_type} {item_id} to cart {cart.id}")
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    item_type=item_type,
                    product_id=item_id if item_type == "product" else None,
                    service_id=item_id if item_type == "service" else None,
                    quantity=quantity,
                    unit_price_cents=unit_price_cents,
                    line_total_cents=quantity * unit_price_cents,
                    title_snapshot=title,
                )
            )

        self.repo.update_cart(cart.id, {"updated_at": _now()})
        self.repo.commit()

        return cart.id

    def update_item(self, session_token: str | None, item_id: str | None, quantity: int | None) -> None:
        if not session_token or not item_id or quantity is None:
            raise ValidationError("sessionToken, itemId, and quantity are required")

        if not _is_positive_int(quantity):
            raise ValidationError("Quantity must be greater than 0")

        cart = self.repo.find_active_cart(session_token)
        if not cart:
            raise NotFoundError("Cart not found")

        item = self.repo.get_cart_item(cart.id, item_id)
        if not item:
            raise NotFoundError("Item not found in cart")

        # line total zawsze liczony z ceny zapisanej w bazie
        item.quantity = quantity
        item.line_total_cents = quantity * item.unit_price_cents

        self.repo.update_cart(cart.id, {"updated_at": _now()})
        self.repo.commit()

        logger.info(f"Cart {cart.id} item {item_id} set to quantity {quantity}")

    def remove_item(self, session_token: str | None, item_id: str | None) -> None:
        if not session_token or not item_id:
            raise ValidationError("sessionToken and itemId are required")

        cart = self.repo.find_active_cart(session_token)
        if not cart:
            raise NotFoundError("Cart not found")

        removed = self.repo.delete_cart_item(cart.id, item_id)
        self.repo.update_cart(cart.id, {"updated_at": _now()})
        self.repo.commit()

        logger.info(f"Removed {removed} item(s) {item_id} from cart {cart.id}")

    def attach_booking(
        self,
        session_token: str | None,
        business_id: str | None,
        service_id: str | None,
        start_time: str | None,
        end_time: str | None,
        timezone_name: str | None,
        customer_name: str | None = None,
        customer_phone: str | None = None,
        notes: str | None = None,
    ) -> str:
        if not all([session_token, business_id, service_id, start_time, end_time, timezone_name]):
            raise ValidationError("Missing required fields")

        cart = self._get_or_create_for_token(session_token, business_id)

        if cart.business_id != business_id:
            raise ValidationError("Cannot mix bookings from different businesses. Please clear your cart first.")

        if not self.repo.get_menu_item(business_id, service_id):
            raise NotFoundError("Service not found")

        booking = self.repo.get_booking(cart.id) or CartBookingModel(cart_id=cart.id)
        booking.service_id = service_id
        booking.start_time = start_time
        booking.end_time = end_time
        booking.timezone = timezone_name
        booking.customer_name = customer_name or None
        booking.customer_phone = customer_phone or None
        booking.notes = notes or None
        booking.status = "draft"
        self.repo.save_booking(booking)

        self.repo.update_cart(cart.id, {"updated_at": _now()})
        self.repo.commit()

        logger.info(f"Booking for service {service_id} attached to cart {cart.id}")
        return cart.id

    def clear(self, session_token: str | None) -> Dict[str, Any]:
        if not session_token:
            raise ValidationError("sessionToken is required")

        cart = self.repo.find_active_cart(session_token)
        if not cart:
            return {"success": True, "message": "No active cart found"}

        self.repo.delete_cart_contents(cart.id)
        # koszyk nie jest usuwany, tylko porzucony
        self.repo.update_cart(cart.id, {"status": "abandoned", "updated_at": _now()})
        self.repo.commit()

        logger.info(f"Cart {cart.id} cleared and abandoned")
        return {"success": True}

    def _get_or_create_for_token(self, session_token: str, business_id: str) -> CartModel:
        cart = self.repo.find_active_cart(session_token, not_expired_at=_now())
        if cart:
            return cart
        return self._create_cart(business_id, session_token)

    def _create_cart(self, business_id: str, token: str) -> CartModel:
        now = _now()
        created = self.repo.create_cart(
            CartModel(
                business_id=business_id,
                session_token=token,
                status="active",
                expires_at=now + timedelta(seconds=self.settings.cart_ttl_seconds),
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(f"Created cart {created.id} for business {business_id}")
        return created
