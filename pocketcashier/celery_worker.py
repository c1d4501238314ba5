# pocketcashier/celery_worker.py
from celery import Celery

from pocketcashier.utils.settings import get_settings

settings = get_settings()

celery_app = Celery(
    "pocketcashier",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

# taski musza byc zaimportowane jawnie zeby worker je zarejestrowal
celery_app.conf.imports = (
    "pocketcashier.tasks.expire",
    "pocketcashier.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "abandon-expired-carts": {
        "task": "pocketcashier.tasks.expire.expire_carts_task",
        "schedule": float(settings.cart_sweep_interval_seconds),
    },
}

celery_app.conf.timezone = "UTC"
