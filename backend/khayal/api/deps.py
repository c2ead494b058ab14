"""Shared FastAPI dependencies for the email connector and notification service."""

from fastapi import Depends, Request

from khayal.config import settings
from khayal.connectors.base import EmailConnector
from khayal.services.notifications import NotificationService


def get_email_connector(request: Request) -> EmailConnector:
    """The connector opened by the application lifespan."""
    return request.app.state.email_connector


def get_notification_service(connector: EmailConnector = Depends(get_email_connector)) -> NotificationService:
    return NotificationService(connector, settings)
