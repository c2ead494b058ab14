from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from khayal.api.deps import get_notification_service
from khayal.database import get_db
from khayal.exceptions import ValidationError
from khayal.schemas.auth import MessageResponse, PasswordResetConfirm, PasswordResetRequest
from khayal.services.notifications import NotificationService
from khayal.services.password_reset import request_password_reset, reset_password
from khayal.utils.audit_logger import create_audit_log

router = APIRouter()

# Same answer for known and unknown addresses
RESET_REQUESTED_MESSAGE = "If your email is registered, you will receive reset instructions"

@router.post("", response_model=MessageResponse)
async def request_reset(
    request: Request,
    body: PasswordResetRequest,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Email a single-use password reset link to the admin registered under the address."""
    if not body.email or not body.email.strip():
        raise ValidationError("Email is required")

    admin = await request_password_reset(db, notifier, body.email.strip())
    if admin is not None:
        create_audit_log(
            db, request,
            action="password_reset_requested",
            entity_type="admin",
            entity_id=admin.id,
            user=admin.username
        )
    return {"message": RESET_REQUESTED_MESSAGE}

@router.post("/{user_id}/{token}", response_model=MessageResponse)
async def confirm_reset(
    request: Request,
    user_id: int,
    token: str,
    body: PasswordResetConfirm,
    db: Session = Depends(get_db)
):
    """Redeem a reset token and set the new password."""
    if not body.password:
        raise ValidationError("Password is required")

    admin = reset_password(db, user_id, token, body.password)
    create_audit_log(
        db, request,
        action="password_reset_completed",
        entity_type="admin",
        entity_id=admin.id,
        user=admin.username
    )
    return {"message": "Password reset successful"}
