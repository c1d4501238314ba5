from sqlalchemy import Boolean, Column, ForeignKey, String

from pocketcashier.data.database import Base


class BusinessModel(Base):
    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    square_location_id = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class BusinessSettingsModel(Base):
    __tablename__ = "settings"

    business_id = Column(String(36), ForeignKey("businesses.id", ondelete="CASCADE"), primary_key=True)
    admin_email = Column(String(255), nullable=True)
    order_prefix = Column(String(20), nullable=True)

    mailerlite_enabled = Column(Boolean, nullable=False, default=False)
    mailerlite_api_key = Column(String(512), nullable=True)
    mailerlite_group_id = Column(String(64), nullable=True)
