#pocketcashier/data/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.orm import relationship

from pocketcashier.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    business_id = Column(String(36), nullable=False)
    session_token = Column(String(64), nullable=False)

    # active, abandoned, checked_out
    status = Column(String(20), nullable=False, default="active")
    # wypelniane dopiero przy checkout
    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(64), nullable=True)

    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
    )
    booking = relationship(
        "CartBookingModel",
        back_populates="cart",
        uselist=False,
        cascade="all, delete-orphan",
    )

    # bez unique, lookup-then-create
    __table_args__ = (Index("ix_carts_session_status", "session_token", "status"),)
