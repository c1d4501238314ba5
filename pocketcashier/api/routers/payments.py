# pocketcashier/api/routers/payments.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocketcashier.api.deps import get_notifier, get_square_client
from pocketcashier.data.database import get_db
from pocketcashier.domain.schemas import ProcessShopPaymentIn
from pocketcashier.services.notification_service import NotificationService
from pocketcashier.services.payment_service import PaymentService
from pocketcashier.services.square_client import SquareClient

router = APIRouter(tags=["payments"])


def get_service(
    db: Session = Depends(get_db),
    square: SquareClient = Depends(get_square_client),
    notifier: NotificationService = Depends(get_notifier),
):
    return PaymentService(db, square, notifier)


@router.post("/process-shop-payment")
def process_shop_payment(payload: ProcessShopPaymentIn, svc: PaymentService = Depends(get_service)):
    return svc.charge(payload)
