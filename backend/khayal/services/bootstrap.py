"""Startup seeding of the default admin account."""

import logging

from sqlalchemy.orm import Session

from khayal.auth import get_password_hash
from khayal.config import Settings
from khayal.models.admin import Admin

log = logging.getLogger(__name__)


def ensure_default_admin(db: Session, settings: Settings) -> bool:
    """Create the configured admin when no admin exists. Returns True if one was created."""
    if db.query(Admin).count() > 0:
        return False

    admin = Admin(
        username=settings.default_admin_username,
        email=settings.default_admin_email,
        hashed_password=get_password_hash(settings.default_admin_password),
        is_active=True,
    )
    db.add(admin)
    db.commit()
    log.info(f"Default admin account '{admin.username}' created")
    return True
