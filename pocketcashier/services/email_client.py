# pocketcashier/services/email_client.py
import requests

from pocketcashier.domain.exceptions import UpstreamError
from pocketcashier.utils.retry import http_retry
from pocketcashier.utils.settings import Settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


class ResendClient:
    def __init__(self, settings: Settings):
        self.api_key = settings.resend_api_key
        self.url = settings.resend_api_url
        self.sender = settings.email_from
        self.timeout = settings.http_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @http_retry()
    def _post(self, body: dict) -> requests.Response:
        return requests.post(
            self.url,
            json=body,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )

    def send(self, to: str, subject: str, html: str) -> dict:
        logger.info(f"ResendClient POST {self.url} to={to} subject={subject!r}")

        try:
            resp = self._post({
                "from": self.sender,
                "to": [to],
                "subject": subject,
                "html": html,
            })
        except requests.RequestException as e:
            raise UpstreamError(f"Failed to send email: {e}")

        if not resp.ok:
            logger.error(f"Resend API error ({resp.status_code}): {resp.text}")
            raise UpstreamError(f"Failed to send email: {resp.text}")

        return resp.json() if resp.content else {}
