from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from khayal.auth import authenticate_admin, get_current_admin, issue_token
from khayal.database import get_db
from khayal.exceptions import InvalidCredentials
from khayal.schemas.auth import Admin, LoginRequest, Token
from khayal.utils.audit_logger import create_audit_log

import logging
log = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=Token)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Authenticate the admin and return a bearer token."""
    try:
        admin = authenticate_admin(db, credentials.username, credentials.password)
    except InvalidCredentials:
        log.info(f"Failed login attempt for username '{credentials.username}'")
        create_audit_log(db, request, action="login_failed", user=credentials.username)
        raise

    create_audit_log(
        db, request,
        action="login_success",
        entity_type="admin",
        entity_id=admin.id,
        user=admin.username
    )
    return {"token": issue_token(admin)}

@router.get("/me", response_model=Admin)
async def read_current_admin(current_admin: Annotated[Admin, Depends(get_current_admin)]):
    """Get the authenticated admin (used by the admin UI to validate a stored token)."""
    return current_admin
