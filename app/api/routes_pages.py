"""
Server-rendered pages: event list, event detail and the booking widget
"""

import logging
from pathlib import Path
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import ErrorCode
from app.services.booking_service import BookingService
from app.services.repositories import BookingRepo, EventRepo
from app.utils.responses import DOMAIN_ERROR_STATUS

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

def render_event(request: Request, event, db: Session, submitted: bool = False,
                 error: str = None, email: str = "", status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "event_detail.html",
        {
            "title": event.title,
            "event": event,
            "bookings": BookingRepo.count_for_event(db, event.id),
            "submitted": submitted,
            "error": error,
            "email": email,
        },
        status_code=status_code
    )

def render_not_found(request: Request, slug: str):
    return templates.TemplateResponse(
        request,
        "not_found.html",
        {"title": "Event not found", "slug": slug},
        status_code=status.HTTP_404_NOT_FOUND
    )

def render_error(request: Request):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Something went wrong"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )

@router.get("/", response_class=HTMLResponse)
def event_list_page(request: Request, db: Session = Depends(get_db)):
    """Listing of all events"""
    try:
        events = EventRepo.list_all(db)
    except Exception:
        logger.exception("Event list page failed")
        return render_error(request)
    return templates.TemplateResponse(
        request,
        "events.html",
        {"title": "Dev Events", "events": events}
    )

@router.get("/events/{slug}", response_class=HTMLResponse)
def event_page(slug: str, request: Request, db: Session = Depends(get_db)):
    """Event detail page with the booking form"""
    try:
        event = EventRepo.find_by_slug(db, slug)
        if not event:
            return render_not_found(request, slug)
        return render_event(request, event, db)
    except Exception:
        logger.exception(f"Event page failed for {slug!r}")
        return render_error(request)

@router.post("/events/{slug}/book", response_class=HTMLResponse)
def book_event(
    slug: str,
    request: Request,
    event_id: int = Form(...),
    email: str = Form(""),
    db: Session = Depends(get_db)
):
    """Booking form submission; the event is the one named by the URL"""
    try:
        event = EventRepo.find_by_slug(db, slug)
        if not event:
            return render_not_found(request, slug)

        if event_id != event.id:
            logger.warning(f"Booking form for {slug} posted event_id {event_id}, expected {event.id}")
            return render_event(
                request,
                event,
                db,
                error="This booking form does not match the event",
                email=email,
                status_code=status.HTTP_400_BAD_REQUEST
            )

        result = BookingService.create_booking(db, event_id=event.id, email=email, slug=slug)
        if result["success"]:
            return render_event(request, event, db, submitted=True)

        logger.error(f"Booking failed for {slug}: {result['message']}")
        return render_event(
            request,
            event,
            db,
            error=result["message"],
            email=email,
            status_code=DOMAIN_ERROR_STATUS[ErrorCode(result["error"])]
        )
    except Exception:
        logger.exception(f"Booking form failed for {slug!r}")
        return render_error(request)
