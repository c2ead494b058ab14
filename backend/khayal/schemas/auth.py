from typing import Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class Token(BaseModel):
    token: str


class TokenData(BaseModel):
    id: int
    username: str


class Admin(BaseModel):
    """Authenticated admin identity injected into protected handlers."""
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class PasswordResetRequest(BaseModel):
    email: Optional[str] = None


class PasswordResetConfirm(BaseModel):
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
