import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text

from pocketcashier.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    business_id = Column(String(36), nullable=False, index=True)
    menu_item_id = Column(String(36), nullable=False)
    service_type = Column(String(255), nullable=False)

    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(64), nullable=True)

    booking_date = Column(String(40), nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    business_timezone = Column(String(64), nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="confirmed")
    payment_amount_cents = Column(Integer, nullable=False, default=0)
    payment_status = Column(String(20), nullable=False)  # pending, paid
    payment_id = Column(String(255), nullable=True)
    idempotency_key = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
