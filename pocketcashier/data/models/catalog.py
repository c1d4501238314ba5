from sqlalchemy import Boolean, Column, Integer, Numeric, String

from pocketcashier.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    business_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    price_cents = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)


class MenuItemModel(Base):
    """Usluga z menu, cena w dolarach (nie w centach)."""

    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True)
    business_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
