# pocketcashier/repos/cart_repo.py
from datetime import datetime
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from pocketcashier.data.models.cart import CartModel
from pocketcashier.data.models.cart_item import CartItemModel
from pocketcashier.data.models.cart_booking import CartBookingModel
from pocketcashier.data.models.catalog import ProductModel, MenuItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_active_cart(
        self,
        session_token: str,
        business_id: str | None = None,
        not_expired_at: datetime | None = None,
    ) -> CartModel | None:
        stmt = select(CartModel).where(
            CartModel.session_token == session_token,
            CartModel.status == "active",
        )
        if business_id is not None:
            stmt = stmt.where(CartModel.business_id == business_id)
        if not_expired_at is not None:
            stmt = stmt.where(CartModel.expires_at > not_expired_at)

        # przy wyscigu moga byc dwa aktywne koszyki, bierzemy najnowszy
        stmt = stmt.order_by(CartModel.created_at.desc())
        return self.db.execute(stmt).scalars().first()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart_items(self, cart_id: str) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel).where(CartItemModel.cart_id == cart_id)
            ).scalars().all()
        )

    def get_cart_item(self, cart_id: str, item_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.id == item_id,
            )
        ).scalar_one_or_none()

    def find_cart_item_for(self, cart_id: str, item_type: str, ref_id: str) -> CartItemModel | None:
        column = CartItemModel.product_id if item_type == "product" else CartItemModel.service_id
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.item_type == item_type,
                column == ref_id,
            )
        ).scalars().first()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, cart_id: str, item_id: str) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.id == item_id,
            )
        )
        return res.rowcount

    def delete_cart_contents(self, cart_id: str) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        self.db.execute(delete(CartBookingModel).where(CartBookingModel.cart_id == cart_id))

    def get_booking(self, cart_id: str) -> CartBookingModel | None:
        return self.db.get(CartBookingModel, cart_id)

    def save_booking(self, booking: CartBookingModel) -> CartBookingModel:
        self.db.add(booking)
        self.db.flush()
        return booking

    def update_cart(self, cart_id: str, new_data: dict) -> int:
        res = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id)
            .values(**new_data)
        )
        return res.rowcount

    def abandon_expired_carts(self, now: datetime) -> int:
        res = self.db.execute(
            update(CartModel)
            .where(
                CartModel.status == "active",
                CartModel.expires_at < now,
            )
            .values(status="abandoned", updated_at=now)
        )
        return res.rowcount

    def get_product(self, business_id: str, product_id: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.business_id == business_id,
                ProductModel.is_active.is_(True),
            )
        ).scalar_one_or_none()

    def get_menu_item(self, business_id: str, service_id: str) -> MenuItemModel | None:
        return self.db.execute(
            select(MenuItemModel).where(
                MenuItemModel.id == service_id,
                MenuItemModel.business_id == business_id,
            )
        ).scalar_one_or_none()

    def commit(self):
        self.db.commit()
