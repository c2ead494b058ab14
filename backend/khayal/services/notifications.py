"""Composes and sends the site's transactional email."""

import logging
from typing import Any, Dict

from khayal.config import Settings
from khayal.connectors.base import EmailConnector, EmailMessage
from khayal.constants.email_templates import (
    render_contact_confirmation,
    render_contact_notification,
    render_password_reset,
)

log = logging.getLogger(__name__)


class NotificationService:
    """Builds each email from its template and hands it to the email connector."""

    def __init__(self, connector: EmailConnector, settings: Settings):
        self.connector = connector
        self.settings = settings

    async def send_contact_notification(self, name: str, email: str, subject: str, message: str) -> Dict[str, Any]:
        """Forward a contact-form submission to the business address."""
        html_body = render_contact_notification(name, email, subject, message, self.settings.site_name)
        return await self.connector.send(EmailMessage(
            to=[self.settings.contact_recipient],
            subject=f"[Website Contact] {subject}",
            html=html_body,
        ))

    async def send_contact_confirmation(self, name: str, email: str, subject: str, message: str) -> Dict[str, Any]:
        """Thank the submitter and echo their message back."""
        html_body = render_contact_confirmation(
            name, subject, message, self.settings.site_name, self.settings.site_location
        )
        return await self.connector.send(EmailMessage(
            to=[email],
            subject=f"Thank you for contacting {self.settings.site_name}",
            html=html_body,
        ))

    async def send_password_reset(self, username: str, email: str, reset_url: str) -> Dict[str, Any]:
        html_body = render_password_reset(
            username, reset_url, self.settings.reset_token_expire_minutes, self.settings.site_name
        )
        log.info(f"Sending password reset to: {email}")
        return await self.connector.send(EmailMessage(
            to=[email],
            subject=f"Reset Your {self.settings.site_name} Admin Password",
            html=html_body,
        ))
