# pocketcashier/repos/referral_repo.py
from typing import Any

from sqlalchemy import text
from sqlalchemy.orm import Session


class ReferralRepo:
    """Funkcje referral sa procedurami w bazie (Postgres), repo tylko je wola."""

    def __init__(self, db: Session):
        self.db = db

    def get_referral_balance(self, code: str, business_id: str, customer_email: str | None) -> Any:
        return self.db.execute(
            text("SELECT get_referral_balance(:p_code, :p_business_id, :p_customer_email)"),
            {
                "p_code": code,
                "p_business_id": business_id,
                "p_customer_email": customer_email,
            },
        ).scalar()

    def create_referral_code(self, business_id: str, customer_email: str | None, customer_id: str | None) -> Any:
        res = self.db.execute(
            text("SELECT create_referral_code(:p_business_id, :p_customer_email, :p_customer_id)"),
            {
                "p_business_id": business_id,
                "p_customer_email": customer_email,
                "p_customer_id": customer_id,
            },
        ).scalar()
        self.db.commit()
        return res
