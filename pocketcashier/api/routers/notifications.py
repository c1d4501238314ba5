# pocketcashier/api/routers/notifications.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocketcashier.data.database import get_db
from pocketcashier.domain.schemas import SendOrderEmailIn, CaptureLeadIn
from pocketcashier.services.email_service import EmailService
from pocketcashier.utils.settings import Settings, get_settings

router = APIRouter(tags=["notifications"])


def get_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    return EmailService(db, settings)


@router.post("/send-order-email")
def send_order_email(payload: SendOrderEmailIn, svc: EmailService = Depends(get_service)):
    return svc.send_order_email(payload)


@router.post("/capture-mailerlite-lead")
def capture_mailerlite_lead(payload: CaptureLeadIn, svc: EmailService = Depends(get_service)):
    return svc.capture_lead(payload.business_id, payload.customer_email, payload.customer_name)
