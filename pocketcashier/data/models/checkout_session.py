import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Text

from pocketcashier.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CheckoutSessionModel(Base):
    """Jedna proba zaplaty za caly koszyk (produkty + booking)."""

    __tablename__ = "checkout_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    business_id = Column(String(36), nullable=False)

    square_location_id = Column(String(255), nullable=False)
    idempotency_key = Column(String(255), nullable=False)
    amount_total_cents = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    # processing, pending, paid, failed
    status = Column(String(20), nullable=False, default="processing")
    square_payment_id = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
