# pocketcashier/repos/order_repo.py
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from pocketcashier.data.models.order import ShopOrderModel
from pocketcashier.data.models.order_item import ShopOrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: ShopOrderModel, items: List[ShopOrderItemModel]) -> ShopOrderModel:
        # zamowienie i pozycje w jednej transakcji
        try:
            self.db.add(order)
            self.db.flush()
            for item in items:
                item.order_id = order.id
                self.db.add(item)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def get_order(self, order_id: str) -> ShopOrderModel | None:
        return self.db.get(ShopOrderModel, order_id)

    def get_order_items(self, order_id: str) -> List[ShopOrderItemModel]:
        return list(
            self.db.execute(
                select(ShopOrderItemModel).where(ShopOrderItemModel.order_id == order_id)
            ).scalars().all()
        )

    def count_order_items(self, order_id: str) -> int:
        return self.db.execute(
            select(func.count(ShopOrderItemModel.id)).where(ShopOrderItemModel.order_id == order_id)
        ).scalar_one()

    def save(self, order: ShopOrderModel) -> ShopOrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order
