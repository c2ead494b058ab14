import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from khayal.api.deps import get_notification_service
from khayal.exceptions import EmailDeliveryError
from khayal.schemas.contact import ContactRequest
from khayal.services.notifications import NotificationService

log = logging.getLogger(__name__)

router = APIRouter()

CONTACT_FIELDS = ("name", "email", "subject", "message")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def read_contact_request(request: Request) -> ContactRequest:
    """Read the submission from a JSON or form-encoded body. Missing, empty or non-text fields come back as None."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        body = dict(await request.form())
    else:
        raw = await request.body()
        try:
            body = json.loads(raw) if raw else {}
        except ValueError:
            body = {}
    if not isinstance(body, dict):
        body = {}
    return ContactRequest(**{
        field: body[field] for field in CONTACT_FIELDS if isinstance(body.get(field), str)
    })


@router.post("/send-email")
async def send_contact_email(
    request: Request,
    notifier: NotificationService = Depends(get_notification_service)
):
    """
    Deliver a contact-form submission.

    The notification to the business address must succeed; the confirmation
    to the submitter is best-effort and only downgrades the response to a
    warning when it fails. Every outcome uses the {success, error} shape.
    """
    try:
        contact = await read_contact_request(request)
        fields = (contact.name, contact.email, contact.subject, contact.message)
        if not all(value and value.strip() for value in fields):
            return _error(status.HTTP_400_BAD_REQUEST, "Missing required fields")

        try:
            notification = await notifier.send_contact_notification(
                contact.name, contact.email, contact.subject, contact.message
            )
        except EmailDeliveryError as e:
            log.error(f"Error sending notification email: {e}")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send email notification")

        try:
            confirmation = await notifier.send_contact_confirmation(
                contact.name, contact.email, contact.subject, contact.message
            )
        except EmailDeliveryError as e:
            log.error(f"Error sending confirmation email: {e}")
            return {
                "success": True,
                "warning": "Notification sent, but confirmation email failed",
                "data": notification
            }
    except Exception:
        log.exception("Unexpected error handling contact form")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return {
        "success": True,
        "message": "Emails sent successfully",
        "data": {"notification": notification, "confirmation": confirmation}
    }
