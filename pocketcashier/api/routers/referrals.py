# pocketcashier/api/routers/referrals.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocketcashier.data.database import get_db
from pocketcashier.domain.schemas import VerifyReferralBalanceIn, RequestReferralCodeIn
from pocketcashier.services.referral_service import ReferralService

router = APIRouter(tags=["referrals"])


def get_service(db: Session = Depends(get_db)):
    return ReferralService(db)


@router.post("/verify-referral-balance")
def verify_referral_balance(payload: VerifyReferralBalanceIn, svc: ReferralService = Depends(get_service)):
    return svc.verify_balance(payload.code, payload.business_id, payload.customer_email)


@router.post("/request-referral-code")
def request_referral_code(payload: RequestReferralCodeIn, svc: ReferralService = Depends(get_service)):
    return svc.request_code(payload.business_id, payload.customer_email, payload.customer_id)
