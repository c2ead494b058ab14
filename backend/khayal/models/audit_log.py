"""Audit log model for tracking admin operations."""

from sqlalchemy import Column, Integer, String, DateTime, Index, JSON
from sqlalchemy.sql import func
from khayal.database import Base


class AuditLog(Base):
    """Audit trail for admin logins, content changes and password resets."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)

    # Action details
    action = Column(String(100), nullable=False)  # 'login_success', 'member_created', ...
    entity_type = Column(String(50), nullable=True)  # 'member', 'performance', 'admin'
    entity_id = Column(Integer, nullable=True)

    # User and context
    user = Column(String(100), nullable=True)
    details = Column(JSON, nullable=True)

    # IP tracking
    ip_address = Column(String(45), nullable=True)  # supports IPv6
    user_agent = Column(String, nullable=True)

    # Timestamp
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index('idx_audit_logs_action', 'action'),
        Index('idx_audit_logs_ip_created', 'ip_address', 'created_at'),
    )

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', entity='{self.entity_type}')>"
