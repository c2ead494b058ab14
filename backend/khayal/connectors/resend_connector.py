import httpx
import logging
from typing import Dict, Any

from khayal.connectors.base import EmailConnector, EmailMessage
from khayal.exceptions import EmailDeliveryError
from khayal.logging_setup import TRACE

log = logging.getLogger(__name__)

class ResendConnector(EmailConnector):
    """
    Connector for the Resend transactional email API.
    One instance is opened at application startup and closed at shutdown.
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.base_url = self.config["base_url"].rstrip("/")
        self.api_key = self.config["api_key"]
        self.default_sender = self.config["sender"]
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=self.config.get("timeout", 30))
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        if not self.api_key:
            log.warning("Resend API key is not configured; outgoing email will be rejected by the provider")
        log.info(f"Resend connector initialized with base URL: {self.base_url}")

    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        payload = {
            "from": message.sender or self.default_sender,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
        }
        try:
            log.log(TRACE, f"Resend API POST /emails to={message.to} subject={message.subject!r}")
            response = await self.client.post("/emails", json=payload, headers=self.headers)
            log.log(TRACE, f"Resend API response: {response.status_code}")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            log.error(f"HTTP error for {e.request.url}: {e.response.status_code} - {e.response.text}")
            raise EmailDeliveryError(f"Email provider returned {e.response.status_code}") from e
        except httpx.RequestError as e:
            log.error(f"Request error for {e.request.url}: {e}")
            raise EmailDeliveryError("Email provider unreachable") from e
        log.info(f"Email '{message.subject}' sent to {', '.join(message.to)} (id={data.get('id')})")
        return data

    async def close(self) -> None:
        await self.client.aclose()
