"""Referral endpoints delegate to database procedures."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import ProgrammingError

from pocketcashier.domain.exceptions import UpstreamError, ValidationError
from pocketcashier.services.referral_service import ReferralService

from conftest import BUSINESS_ID


def _service(repo):
    svc = ReferralService(Mock())
    svc.repo = repo
    return svc


class TestVerifyBalance:
    def test_code_is_uppercased(self):
        repo = Mock()
        repo.get_referral_balance.return_value = {"valid": True, "balance_cents": 500}

        result = _service(repo).verify_balance("friend10", BUSINESS_ID, "dana@example.com")

        repo.get_referral_balance.assert_called_once_with("FRIEND10", BUSINESS_ID, "dana@example.com")
        assert result == {"valid": True, "balance_cents": 500}

    def test_empty_email_passed_as_none(self):
        repo = Mock()
        _service(repo).verify_balance("abc", BUSINESS_ID, "")
        repo.get_referral_balance.assert_called_once_with("ABC", BUSINESS_ID, None)

    def test_missing_code_is_400(self, client):
        response = client.post("/verify-referral-balance", json={"businessId": BUSINESS_ID})
        assert response.status_code == 400
        assert response.json() == {"error": "Code and business ID are required"}

    def test_database_error_is_upstream(self):
        repo = Mock()
        repo.get_referral_balance.side_effect = ProgrammingError("SELECT", {}, Exception("no function"))

        with pytest.raises(UpstreamError):
            _service(repo).verify_balance("abc", BUSINESS_ID)


class TestRequestCode:
    def test_anonymous_needs_email(self):
        with pytest.raises(ValidationError, match="Email is required for anonymous users"):
            _service(Mock()).request_code(BUSINESS_ID)

    def test_signed_in_customer_without_email(self):
        repo = Mock()
        repo.create_referral_code.return_value = {"code": "DANA42"}

        result = _service(repo).request_code(BUSINESS_ID, customer_id="cust-1")

        repo.create_referral_code.assert_called_once_with(BUSINESS_ID, None, "cust-1")
        assert result == {"code": "DANA42"}

    def test_missing_business_is_400(self, client):
        response = client.post("/request-referral-code", json={"customerEmail": "dana@example.com"})
        assert response.status_code == 400
        assert response.json() == {"error": "Business ID is required"}
