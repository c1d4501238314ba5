# pocketcashier/repos/checkout_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from pocketcashier.data.models.booking import BookingModel
from pocketcashier.data.models.checkout_session import CheckoutSessionModel
from pocketcashier.data.models.order import ShopOrderModel
from pocketcashier.data.models.order_item import ShopOrderItemModel


class CheckoutRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_paid_session(self, cart_id: str) -> CheckoutSessionModel | None:
        return self.db.execute(
            select(CheckoutSessionModel).where(
                CheckoutSessionModel.cart_id == cart_id,
                CheckoutSessionModel.status == "paid",
            )
        ).scalars().first()

    def create_session(self, session: CheckoutSessionModel) -> CheckoutSessionModel:
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def save_session(self, session: CheckoutSessionModel) -> None:
        self.db.add(session)
        self.db.commit()

    def finalize(
        self,
        session: CheckoutSessionModel,
        order: ShopOrderModel | None,
        order_items: List[ShopOrderItemModel],
        booking: BookingModel | None,
    ) -> None:
        # sesja, koszyk, zamowienie i booking w jednej transakcji
        try:
            self.db.add(session)
            if order is not None:
                self.db.add(order)
                self.db.flush()
                for item in order_items:
                    item.order_id = order.id
                    self.db.add(item)
            if booking is not None:
                self.db.add(booking)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def get_booking(self, booking_id: str) -> BookingModel | None:
        return self.db.get(BookingModel, booking_id)
