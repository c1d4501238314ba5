from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from pocketcashier.data.database import Base


class CartBookingModel(Base):
    __tablename__ = "cart_booking_details"

    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True)
    service_id = Column(String(36), nullable=False)

    start_time = Column(String(40), nullable=False)
    end_time = Column(String(40), nullable=False)
    timezone = Column(String(64), nullable=False)

    customer_name = Column(String(255), nullable=True)
    customer_phone = Column(String(64), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="draft")  # draft, confirmed

    cart = relationship("CartModel", back_populates="booking")
