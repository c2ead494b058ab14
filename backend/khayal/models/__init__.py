"""Database models."""

from khayal.models.admin import Admin
from khayal.models.reset_token import ResetToken
from khayal.models.member import Member
from khayal.models.performance import Performance
from khayal.models.audit_log import AuditLog

__all__ = [
    "Admin",
    "ResetToken",
    "Member",
    "Performance",
    "AuditLog",
]
