#pocketcashier/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocketcashier.data.database import get_db
from pocketcashier.domain.schemas import (
    GetOrCreateCartIn,
    AddCartItemIn,
    UpdateCartItemIn,
    RemoveCartItemIn,
    AddCartBookingIn,
    ClearCartIn,
    CartOut,
    CartItemOut,
    CartBookingOut,
    CartEnvelopeOut,
)
from pocketcashier.services.cart_service import CartService
from pocketcashier.utils.settings import Settings, get_settings

router = APIRouter(tags=["carts"])


def get_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    return CartService(db=db, settings=settings)


@router.post("/get-or-create-cart", response_model=CartEnvelopeOut)
def get_or_create_cart(payload: GetOrCreateCartIn, svc: CartService = Depends(get_service)):
    contents = svc.get_or_create(payload.business_id, payload.session_token)
    booking = contents["booking"]
    return CartEnvelopeOut(
        cart=CartOut.model_validate(contents["cart"]),
        items=[CartItemOut.model_validate(i) for i in contents["items"]],
        booking=CartBookingOut.model_validate(booking) if booking else None,
    )


@router.post("/add-cart-item")
def add_cart_item(payload: AddCartItemIn, svc: CartService = Depends(get_service)):
    cart_id = svc.add_item(
        session_token=payload.session_token,
        business_id=payload.business_id,
        item_type=payload.item_type,
        item_id=payload.item_id,
        quantity=payload.quantity,
    )
    return {"success": True, "cartId": cart_id}


@router.post("/update-cart-item")
def update_cart_item(payload: UpdateCartItemIn, svc: CartService = Depends(get_service)):
    svc.update_item(payload.session_token, payload.item_id, payload.quantity)
    return {"success": True}


@router.post("/remove-cart-item")
def remove_cart_item(payload: RemoveCartItemIn, svc: CartService = Depends(get_service)):
    svc.remove_item(payload.session_token, payload.item_id)
    return {"success": True}


@router.post("/add-cart-booking")
def add_cart_booking(payload: AddCartBookingIn, svc: CartService = Depends(get_service)):
    cart_id = svc.attach_booking(
        session_token=payload.session_token,
        business_id=payload.business_id,
        service_id=payload.service_id,
        start_time=payload.start_time,
        end_time=payload.end_time,
        timezone_name=payload.timezone,
        customer_name=payload.customer_name,
        customer_phone=payload.customer_phone,
        notes=payload.notes,
    )
    return {"success": True, "cartId": cart_id}


@router.post("/clear-cart")
def clear_cart(payload: ClearCartIn, svc: CartService = Depends(get_service)):
    return svc.clear(payload.session_token)
