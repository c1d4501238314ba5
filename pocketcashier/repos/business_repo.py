# pocketcashier/repos/business_repo.py
from sqlalchemy.orm import Session

from pocketcashier.data.models.business import BusinessModel, BusinessSettingsModel


class BusinessRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_business(self, business_id: str) -> BusinessModel | None:
        return self.db.get(BusinessModel, business_id)

    def get_settings(self, business_id: str) -> BusinessSettingsModel | None:
        return self.db.get(BusinessSettingsModel, business_id)
