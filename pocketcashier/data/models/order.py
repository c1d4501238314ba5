import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from pocketcashier.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ShopOrderModel(Base):
    __tablename__ = "shop_orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    business_id = Column(String(36), nullable=False, index=True)

    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(64), nullable=True)

    status = Column(String(20), nullable=False, default="draft")  # draft, pending, paid
    subtotal_cents = Column(Integer, nullable=False, default=0)
    tax_cents = Column(Integer, nullable=False, default=0)
    shipping_cents = Column(Integer, nullable=False, default=0)
    total_cents = Column(Integer, nullable=False, default=0)

    idempotency_key = Column(String(255), nullable=True)
    square_payment_id = Column(String(255), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now)

    items = relationship(
        "ShopOrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
    )
