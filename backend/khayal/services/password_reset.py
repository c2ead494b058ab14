"""Password reset token issuance and redemption.

A token moves NONE -> ISSUED -> CONSUMED | EXPIRED. Only a bcrypt hash of the
secret is stored; the plaintext exists only in the emailed link.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from khayal.auth import get_password_hash, verify_password
from khayal.config import settings
from khayal.exceptions import InvalidOrExpiredToken
from khayal.models.admin import Admin
from khayal.models.reset_token import ResetToken
from khayal.services.notifications import NotificationService

log = logging.getLogger(__name__)

RESET_TOKEN_BYTES = 32


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(token: ResetToken, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now(timezone.utc)
    ttl = timedelta(minutes=settings.reset_token_expire_minutes)
    return _as_utc(token.created_at) + ttl <= now


def purge_expired_tokens(db: Session, now: Optional[datetime] = None) -> int:
    """Delete every expired token row."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(minutes=settings.reset_token_expire_minutes)
    expired = [t for t in db.query(ResetToken).all() if _as_utc(t.created_at) <= cutoff]
    for token in expired:
        db.delete(token)
    if expired:
        db.commit()
        log.debug(f"Purged {len(expired)} expired reset tokens")
    return len(expired)


def build_reset_url(admin_id: int, secret: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/admin/reset-password/{admin_id}/{secret}"


def issue_reset_token(db: Session, admin: Admin) -> str:
    """Replace any existing token for ``admin`` and return the new plaintext secret."""
    db.query(ResetToken).filter(ResetToken.user_id == admin.id).delete(synchronize_session=False)
    secret = secrets.token_hex(RESET_TOKEN_BYTES)
    db.add(ResetToken(user_id=admin.id, token_hash=get_password_hash(secret), created_at=datetime.now(timezone.utc)))
    db.commit()
    return secret


async def request_password_reset(db: Session, notifier: NotificationService, email: str) -> Optional[Admin]:
    """
    Issue a reset token for the admin registered under ``email`` and mail the link.

    Returns the admin, or None when the address is unknown. Callers must answer
    both cases identically. Email delivery errors propagate.
    """
    purge_expired_tokens(db)

    admin = db.query(Admin).filter(Admin.email == email).first()
    if not admin:
        log.info("Password reset requested for an unregistered address")
        return None

    secret = issue_reset_token(db, admin)
    await notifier.send_password_reset(admin.username, admin.email, build_reset_url(admin.id, secret))
    return admin


def reset_password(db: Session, user_id: int, secret: str, new_password: str) -> Admin:
    """Redeem a reset token and set a new password. The token is deleted on success."""
    token = db.query(ResetToken).filter(ResetToken.user_id == user_id).first()
    if token is None:
        raise InvalidOrExpiredToken()

    if is_expired(token):
        db.delete(token)
        db.commit()
        raise InvalidOrExpiredToken()

    if not verify_password(secret, token.token_hash):
        raise InvalidOrExpiredToken()

    admin = db.query(Admin).filter(Admin.id == user_id).first()
    if admin is None:
        raise InvalidOrExpiredToken()

    admin.hashed_password = get_password_hash(new_password)
    db.delete(token)
    db.commit()
    db.refresh(admin)
    log.info(f"Password reset completed for admin {admin.username}")
    return admin
