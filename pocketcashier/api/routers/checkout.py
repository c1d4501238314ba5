# pocketcashier/api/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocketcashier.api.deps import get_notifier, get_square_client
from pocketcashier.data.database import get_db
from pocketcashier.domain.schemas import CreateCheckoutIn
from pocketcashier.services.checkout_service import CheckoutService
from pocketcashier.services.notification_service import NotificationService
from pocketcashier.services.square_client import SquareClient
from pocketcashier.utils.settings import Settings, get_settings

router = APIRouter(tags=["checkout"])


def get_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    square: SquareClient = Depends(get_square_client),
    notifier: NotificationService = Depends(get_notifier),
):
    return CheckoutService(db, settings, square, notifier)


@router.post("/create-unified-checkout")
def create_unified_checkout(payload: CreateCheckoutIn, svc: CheckoutService = Depends(get_service)):
    """Platnosc za caly koszyk; tworzy zamowienie i/lub booking."""
    return svc.checkout(payload)
