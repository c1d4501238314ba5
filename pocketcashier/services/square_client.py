# pocketcashier/services/square_client.py
import requests
from requests import RequestException

from pocketcashier.domain.exceptions import ConfigError, UpstreamError
from pocketcashier.utils.settings import Settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


class SquareClient:
    """
    Minimalny klient Square Payments API.
    Bez retry, deduplikacja ponowien jest po stronie Square (idempotency_key).
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.base_url = settings.square_base_url.rstrip("/")
        self.access_token = settings.square_access_token
        self.version = settings.square_version
        self.timeout = settings.http_timeout_seconds
        self.http = session or requests.Session()

    def create_payment(
        self,
        source_id: str,
        amount_cents: int,
        location_id: str,
        idempotency_key: str,
        reference_id: str,
        note: str | None = None,
        buyer_email: str | None = None,
        currency: str = "USD",
    ) -> dict:
        if not self.access_token:
            raise ConfigError("Square access token is not configured")

        body = {
            "source_id": source_id,
            "amount_money": {"amount": amount_cents, "currency": currency},
            "location_id": location_id,
            "idempotency_key": idempotency_key,
            "reference_id": reference_id,
        }
        if note:
            body["note"] = note
        if buyer_email:
            body["buyer_email_address"] = buyer_email

        url = f"{self.base_url}/v2/payments"
        logger.info(f"SquareClient POST {url} reference={reference_id}")

        try:
            resp = self.http.post(
                url,
                json=body,
                headers={
                    "Authorization": f"Bearer {self.access_token}",
                    "Square-Version": self.version,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except RequestException as e:
            raise UpstreamError(f"Payment processing failed: {e}")

        try:
            data = resp.json() if resp.content else {}
        except ValueError:
            data = {}

        if not resp.ok:
            errors = data.get("errors") or []
            detail = "; ".join(e.get("detail") or e.get("code", "") for e in errors) or resp.text
            logger.error(f"Square payment error ({resp.status_code}): {detail}")
            raise UpstreamError(f"Payment processing failed: {detail}")

        payment = data.get("payment")
        if not payment:
            raise UpstreamError("Payment processing failed: empty response from Square")

        return payment
