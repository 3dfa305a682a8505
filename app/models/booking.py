"""
Booking model
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint

from app.core.db import Base
from app.models.event import utcnow

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    email = Column(String(320), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # One booking per email per event
    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_bookings_event_email"),
    )
