"""Performance (event) model."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from khayal.database import Base


class Performance(Base):
    """Concert or event listed on the public performances page."""

    __tablename__ = "performances"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    date = Column(String(50), nullable=False, index=True)  # ISO date as submitted by the admin form
    venue = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    image = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    ticket_link = Column(String(500), default="", nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Performance(id={self.id}, title='{self.title}', date='{self.date}')>"
