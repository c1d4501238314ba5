# pocketcashier/tasks/expire.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from pocketcashier.celery_worker import celery_app
from pocketcashier.data.database import SessionLocal
from pocketcashier.repos.cart_repo import CartRepo
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


def abandon_expired_carts(db: Session, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    repo = CartRepo(db)

    count = repo.abandon_expired_carts(now)
    repo.commit()

    logger.info(f"Abandoned {count} expired cart(s)")
    return count


@celery_app.task(name="pocketcashier.tasks.expire.expire_carts_task")
def expire_carts_task():
    logger.info("Expire carts task started")

    db = SessionLocal()
    try:
        return abandon_expired_carts(db)
    finally:
        db.close()
