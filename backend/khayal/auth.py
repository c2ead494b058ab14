from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from khayal.config import settings
from khayal.database import get_db
from khayal.exceptions import Forbidden, InvalidCredentials, Unauthenticated
from khayal.models.admin import Admin
from khayal.schemas.auth import Admin as AdminIdentity, TokenData

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

# auto_error is off so a missing header maps to 401 and a bad token to 403
bearer_scheme = HTTPBearer(auto_error=False)

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt

def decode_access_token(token: str) -> TokenData:
    """Verify signature and expiry, returning the embedded identity."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise Forbidden()
    admin_id = payload.get("sub")
    username = payload.get("username")
    if admin_id is None or username is None:
        raise Forbidden()
    try:
        return TokenData(id=int(admin_id), username=username)
    except ValueError:
        raise Forbidden()

def authenticate_admin(db: Session, username: Optional[str], password: Optional[str]) -> Admin:
    if not username or not password:
        raise InvalidCredentials()
    admin = db.query(Admin).filter(Admin.username == username).first()
    if not admin or not admin.is_active:
        raise InvalidCredentials()
    if not verify_password(password, admin.hashed_password):
        raise InvalidCredentials()
    return admin

def issue_token(admin: Admin) -> str:
    return create_access_token(data={"sub": str(admin.id), "username": admin.username})

def get_current_admin(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    db: Session = Depends(get_db),
) -> AdminIdentity:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    token_data = decode_access_token(credentials.credentials)
    admin = db.query(Admin).filter(Admin.id == token_data.id).first()
    if admin is None or not admin.is_active:
        raise Forbidden()
    return AdminIdentity.model_validate(admin)
