"""
Event model
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON

from app.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    overview = Column(Text, nullable=True)
    image = Column(String(1024), nullable=False)
    venue = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    date = Column(String(50), nullable=True)
    time = Column(String(50), nullable=True)
    mode = Column(String(50), nullable=True)  # online, offline, hybrid
    audience = Column(String(255), nullable=True)
    organizer = Column(String(255), nullable=True)
    agenda = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
