"""Password reset token model."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from khayal.database import Base


class ResetToken(Base):
    """One live reset token per admin. Only the bcrypt hash of the secret is stored."""

    __tablename__ = "reset_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("admins.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    token_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<ResetToken(id={self.id}, user_id={self.user_id})>"
