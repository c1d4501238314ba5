# pocketcashier/services/mailerlite_client.py
import requests

from pocketcashier.utils.retry import http_retry
from pocketcashier.utils.settings import Settings
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


class MailerLiteClient:
    def __init__(self, settings: Settings):
        self.url = settings.mailerlite_api_url
        self.timeout = settings.http_timeout_seconds

    @http_retry()
    def add_subscriber(self, api_key: str, email: str, name: str | None, group_id: str | None = None) -> requests.Response:
        payload = {"email": email, "fields": {"name": name}}
        if group_id:
            payload["groups"] = [group_id]

        logger.info(f"MailerLiteClient POST {self.url} email={email}")

        return requests.post(
            self.url,
            json=payload,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )
