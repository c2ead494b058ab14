from typing import List, Annotated, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from khayal.auth import get_current_admin
from khayal.database import get_db
from khayal.exceptions import NotFound
from khayal.models.audit_log import AuditLog
from khayal.schemas.audit import AuditLogInDB
from khayal.schemas.auth import Admin

router = APIRouter()

@router.get("", response_model=List[AuditLogInDB])
async def read_audit_logs(
    skip: int = 0,
    limit: int = Query(100, le=500),
    action: Optional[str] = Query(None, description="Filter by specific action"),
    entity_type: Optional[str] = Query(None, description="Filter by entity type: 'member', 'performance', 'admin'"),
    user: Optional[str] = Query(None, description="Filter by username"),
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None,
    db: Session = Depends(get_db)
):
    """Retrieve audit logs, newest first, with optional filters."""
    query = db.query(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc())

    if action:
        query = query.filter(AuditLog.action == action)
    if entity_type:
        query = query.filter(AuditLog.entity_type == entity_type)
    if user:
        query = query.filter(AuditLog.user == user)

    return query.offset(skip).limit(limit).all()

@router.get("/{log_id}", response_model=AuditLogInDB)
async def read_audit_log(
    log_id: int,
    current_admin: Annotated[Admin, Depends(get_current_admin)] = None,
    db: Session = Depends(get_db)
):
    """Retrieve a single audit log by ID."""
    db_log = db.query(AuditLog).filter(AuditLog.id == log_id).first()
    if db_log is None:
        raise NotFound("Audit log not found")
    return db_log
