# pocketcashier/domain/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelIn(BaseModel):
    """
    Body zapytan przychodzi w camelCase (klient JS).
    Pola sa opcjonalne, wymagane sprawdzaja serwisy i zwracaja 400.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- cart ----------

class GetOrCreateCartIn(CamelIn):
    business_id: Optional[str] = None
    session_token: Optional[str] = None


class AddCartItemIn(CamelIn):
    session_token: Optional[str] = None
    business_id: Optional[str] = None
    item_type: Optional[str] = None
    item_id: Optional[str] = None
    quantity: Optional[int] = None


class UpdateCartItemIn(CamelIn):
    session_token: Optional[str] = None
    item_id: Optional[str] = None
    quantity: Optional[int] = None


class RemoveCartItemIn(CamelIn):
    session_token: Optional[str] = None
    item_id: Optional[str] = None


class AddCartBookingIn(CamelIn):
    session_token: Optional[str] = None
    business_id: Optional[str] = None
    service_id: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    timezone: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


class ClearCartIn(CamelIn):
    session_token: Optional[str] = None


class CartItemOut(BaseModel):
    id: str
    cart_id: str
    item_type: str
    product_id: Optional[str] = None
    service_id: Optional[str] = None
    title_snapshot: Optional[str] = None
    unit_price_cents: int
    quantity: int
    line_total_cents: int

    model_config = ConfigDict(from_attributes=True)


class CartBookingOut(BaseModel):
    cart_id: str
    service_id: str
    start_time: str
    end_time: str
    timezone: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None
    status: str

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: str
    business_id: str
    session_token: str
    status: str
    expires_at: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CartEnvelopeOut(BaseModel):
    cart: CartOut
    items: List[CartItemOut]
    booking: Optional[CartBookingOut] = None


# ---------- orders ----------

class OrderItemIn(CamelIn):
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    unit_price_cents: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("unitPriceCents", "unitPrice", "unit_price_cents"),
    )
    quantity: Optional[int] = None


class CreateShopOrderIn(CamelIn):
    business_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[OrderItemIn] = Field(default_factory=list)
    subtotal_cents: int = 0
    tax_cents: int = 0
    shipping_cents: int = 0
    total_cents: int = 0
    idempotency_key: Optional[str] = None
    join_newsletter: bool = False


# ---------- checkout ----------

class CreateCheckoutIn(CamelIn):
    session_token: Optional[str] = None
    business_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    source_id: Optional[str] = None
    idempotency_key: Optional[str] = None


class ProcessShopPaymentIn(CamelIn):
    business_id: Optional[str] = None
    order_id: Optional[str] = None
    total_cents: Optional[int] = None
    source_id: Optional[str] = None
    buyer_email: Optional[str] = None
    idempotency_key: Optional[str] = None


# ---------- notifications ----------

class EmailItemIn(BaseModel):
    name: str
    quantity: int


class SendOrderEmailIn(CamelIn):
    order_id: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    business_id: Optional[str] = None
    items: List[EmailItemIn] = Field(default_factory=list)


class CaptureLeadIn(CamelIn):
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    business_id: Optional[str] = None


# ---------- referrals ----------

class VerifyReferralBalanceIn(CamelIn):
    code: Optional[str] = None
    business_id: Optional[str] = None
    customer_email: Optional[str] = None


class RequestReferralCodeIn(CamelIn):
    business_id: Optional[str] = None
    customer_email: Optional[str] = None
    customer_id: Optional[str] = None
