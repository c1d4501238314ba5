# pocketcashier/services/referral_service.py
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocketcashier.domain.exceptions import ValidationError, UpstreamError
from pocketcashier.repos.referral_repo import ReferralRepo
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


class ReferralService:
    """Wynik procedur w bazie zwracany bez zmian."""

    def __init__(self, db: Session):
        self.repo = ReferralRepo(db)

    def verify_balance(self, code: str | None, business_id: str | None, customer_email: str | None = None) -> Any:
        if not code or not business_id:
            raise ValidationError("Code and business ID are required")

        try:
            return self.repo.get_referral_balance(code.upper(), business_id, customer_email or None)
        except SQLAlchemyError as e:
            logger.error(f"Error getting referral balance: {e}")
            raise UpstreamError(str(e))

    def request_code(self, business_id: str | None, customer_email: str | None = None, customer_id: str | None = None) -> Any:
        if not business_id:
            raise ValidationError("Business ID is required")

        if not customer_id and not customer_email:
            raise ValidationError("Email is required for anonymous users")

        try:
            return self.repo.create_referral_code(business_id, customer_email or None, customer_id)
        except SQLAlchemyError as e:
            logger.error(f"Error creating referral code: {e}")
            raise UpstreamError(str(e))
