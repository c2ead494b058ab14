"""Band member model."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from khayal.database import Base

DEFAULT_MEMBER_ORDER = 999


class Member(Base):
    """Roster entry shown on the public members page."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    instrument = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False)
    image = Column(String(500), nullable=False)  # e.g. /uploads/<uuid>.jpg
    is_captain = Column(Boolean, default=False, nullable=False)
    order = Column(Integer, default=DEFAULT_MEMBER_ORDER, nullable=False)  # display order, ascending
    active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Member(id={self.id}, name='{self.name}', instrument='{self.instrument}')>"
