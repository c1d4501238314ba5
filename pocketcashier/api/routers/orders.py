# pocketcashier/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocketcashier.api.deps import get_notifier
from pocketcashier.data.database import get_db
from pocketcashier.domain.schemas import CreateShopOrderIn
from pocketcashier.services.notification_service import NotificationService
from pocketcashier.services.order_service import OrderService

router = APIRouter(tags=["orders"])


def get_service(db: Session = Depends(get_db), notifier: NotificationService = Depends(get_notifier)):
    return OrderService(db, notifier)


@router.post("/create-shop-order", status_code=201)
def create_shop_order(payload: CreateShopOrderIn, svc: OrderService = Depends(get_service)):
    """
    Tworzy zamowienie w statusie draft.
    Platnosc osobno, przez /process-shop-payment.
    """
    return svc.create_order(payload)
