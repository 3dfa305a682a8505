"""
Booking service used by the booking widget and the bookings API
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import DomainError
from app.schemas.booking import BookingResponse
from app.services.repositories import BookingRepo

logger = logging.getLogger(__name__)

class BookingService:
    """Service for creating bookings"""

    @staticmethod
    def create_booking(
        db: Session,
        event_id: int,
        email: str,
        slug: Optional[str] = None
    ) -> Dict[str, Any]:
        """Book an email onto an event.

        Returns ``{"success": True, "booking": ...}`` or, when the booking is
        rejected, ``{"success": False, "error": <code>, "message": ...}``.
        Unexpected failures propagate.
        """
        try:
            booking = BookingRepo.create(db, event_id, email)
        except DomainError as exc:
            logger.warning(f"Booking failed for event {event_id} ({slug or '-'}): {exc}")
            return {
                "success": False,
                "error": exc.code.value,
                "message": exc.message
            }

        logger.info(f"Booking created for event {event_id} ({slug or '-'})")
        return {
            "success": True,
            "booking": BookingResponse.model_validate(booking).model_dump(mode="json")
        }
