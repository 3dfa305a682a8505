"""
Booking API routes
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import ErrorCode
from app.schemas.booking import BookingCreate
from app.services.booking_service import BookingService
from app.utils.responses import DOMAIN_ERROR_STATUS, error_response, json_response

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/bookings")
def create_booking(
    booking_data: BookingCreate,
    db: Session = Depends(get_db)
):
    """Book an email onto an event"""
    try:
        result = BookingService.create_booking(
            db,
            event_id=booking_data.event_id,
            email=booking_data.email,
            slug=booking_data.slug
        )
    except Exception:
        logger.exception("Booking creation failed")
        return error_response(
            error="An unexpected error occurred while creating the booking",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if not result["success"]:
        return error_response(
            error=result["error"],
            message=result["message"],
            status_code=DOMAIN_ERROR_STATUS[ErrorCode(result["error"])]
        )

    return json_response(result, status_code=status.HTTP_201_CREATED)
