import uuid

from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from pocketcashier.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)

    item_type = Column(String(20), nullable=False, default="product")
    product_id = Column(String(36), nullable=True)
    service_id = Column(String(36), nullable=True)
    title_snapshot = Column(String(255), nullable=True)

    unit_price_cents = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    line_total_cents = Column(Integer, nullable=False)

    cart = relationship("CartModel", back_populates="items")
