# pocketcashier/services/notification_service.py
from dataclasses import dataclass

from pocketcashier.celery_worker import celery_app
from pocketcashier.data.database import SessionLocal
from pocketcashier.services.email_service import EmailService
from pocketcashier.utils.settings import get_settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BestEffort:
    """
    Wynik wyslania powiadomienia do kolejki.
    Wywolujacy nigdy nie czeka na sam task i nie zmienia przez niego odpowiedzi.
    """

    accepted: bool
    task_id: str | None = None
    reason: str | None = None


class NotificationService:
    """
    Fire-and-forget: taski Celery odpalane przez .delay().
    Blad brokera jest logowany i zwracany jako BestEffort(accepted=False).
    """

    def order_paid(self, order_id: str, business_id: str, payment_id: str | None) -> BestEffort:
        return self._dispatch(
            send_shop_order_email_task,
            order_id=order_id,
            business_id=business_id,
            payment_id=payment_id,
        )

    def booking_confirmed(self, booking_id: str) -> BestEffort:
        return self._dispatch(send_booking_confirmation_task, booking_id=booking_id)

    def capture_lead(self, business_id: str, customer_email: str, customer_name: str | None) -> BestEffort:
        return self._dispatch(
            capture_lead_task,
            business_id=business_id,
            customer_email=customer_email,
            customer_name=customer_name,
        )

    @staticmethod
    def _dispatch(task, **kwargs) -> BestEffort:
        try:
            result = task.delay(**kwargs)
        except Exception as e:
            logger.warning(f"[NOTIFICATION] {task.name} not dispatched: {e}")
            return BestEffort(accepted=False, reason=str(e))

        logger.info(f"[NOTIFICATION] {task.name} dispatched as {result.id}")
        return BestEffort(accepted=True, task_id=result.id)


@celery_app.task(name="pocketcashier.services.notification_service.send_shop_order_email_task", ignore_result=True)
def send_shop_order_email_task(order_id: str, business_id: str, payment_id: str | None = None):
    db = SessionLocal()
    try:
        result = EmailService(db, get_settings()).send_shop_order_email(order_id, business_id, payment_id)
        logger.info(f"[NOTIFICATION] Order {order_id} confirmation: {result}")
        return result
    finally:
        db.close()


@celery_app.task(name="pocketcashier.services.notification_service.capture_lead_task", ignore_result=True)
def capture_lead_task(business_id: str, customer_email: str, customer_name: str | None = None):
    db = SessionLocal()
    try:
        result = EmailService(db, get_settings()).capture_lead(business_id, customer_email, customer_name)
        logger.info(f"[NOTIFICATION] Lead {customer_email} for business {business_id}: {result}")
        return result
    finally:
        db.close()


@celery_app.task(name="pocketcashier.services.notification_service.send_booking_confirmation_task", ignore_result=True)
def send_booking_confirmation_task(booking_id: str):
    db = SessionLocal()
    try:
        result = EmailService(db, get_settings()).send_booking_confirmation(booking_id)
        logger.info(f"[NOTIFICATION] Booking {booking_id} confirmation: {result}")
        return result
    finally:
        db.close()
