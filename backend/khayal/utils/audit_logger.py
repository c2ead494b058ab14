"""Records admin logins, content edits and password resets in the audit_logs table."""

from typing import Optional, Dict, Any
from fastapi import Request
from sqlalchemy.orm import Session

from khayal.models.audit_log import AuditLog
from khayal.utils.ip_extractor import get_client_ip


def create_audit_log(
    db: Session,
    request: Request,
    action: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    user: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """
    Commit one audit row for ``action`` (e.g. 'member_updated') on a member,
    performance or admin, stamped with the caller's address and browser.
    """
    entry = AuditLog(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        user=user,
        details=details,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent")
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry
