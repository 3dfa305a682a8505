"""
Booking-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class BookingCreate(BaseModel):
    """Booking submitted by the booking widget"""
    model_config = ConfigDict(populate_by_name=True)

    event_id: int = Field(alias="eventId")
    slug: Optional[str] = None
    email: str

class BookingResponse(BaseModel):
    """Booking response"""
    id: int
    event_id: int
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
