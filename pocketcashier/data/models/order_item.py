import uuid

from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from pocketcashier.data.database import Base


class ShopOrderItemModel(Base):
    __tablename__ = "shop_order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("shop_orders.id", ondelete="CASCADE"), nullable=False, index=True)

    product_id = Column(String(36), nullable=True)
    product_name = Column(String(255), nullable=False)
    unit_price_cents = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    line_total_cents = Column(Integer, nullable=False)

    order = relationship("ShopOrderModel", back_populates="items")
