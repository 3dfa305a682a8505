"""
Repository layer for events and bookings.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    DuplicateBookingError,
    DuplicateSlugError,
    EventReferenceError,
    InvalidEmailError,
)
from app.models import Booking, Event
from app.utils.slugs import is_valid_slug, normalize_slug, slugify

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def find_by_slug(db: Session, slug: str) -> Optional[Event]:
        """Look up an event by slug; None when nothing matches"""
        return db.query(Event).filter(Event.slug == normalize_slug(slug)).first()

    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def exists(db: Session, event_id: int) -> bool:
        return db.query(Event.id).filter(Event.id == event_id).first() is not None

    @staticmethod
    def list_all(db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.created_at.desc(), Event.id.desc()).all()

    @staticmethod
    def create(db: Session, data: Dict[str, Any]) -> Event:
        """Persist a new event.

        ``data`` must already carry the uploaded image URL and decoded
        tags/agenda. The slug is normalized, or derived from the title when
        none is given.
        """
        fields = dict(data)
        slug = fields.pop("slug", None)
        slug = normalize_slug(slug) if slug else slugify(fields["title"])
        if not is_valid_slug(slug):
            raise ValueError(f"Invalid event slug: {slug!r}")

        event = Event(slug=slug, **fields)
        db.add(event)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            # only the unique slug index maps to a duplicate; anything else propagates
            if EventRepo.find_by_slug(db, slug) is not None:
                raise DuplicateSlugError(slug) from exc
            raise
        db.refresh(event)
        logger.info(f"Event created: {event.slug} (id={event.id})")
        return event


# -------- Booking repository --------

def normalize_email(email: str) -> str:
    return email.strip().lower()

def validate_email(email: str) -> str:
    """Normalize an email and check its local@domain.tld shape"""
    normalized = normalize_email(email)
    if not EMAIL_PATTERN.match(normalized):
        raise InvalidEmailError(email)
    return normalized

def ensure_event_exists(db: Session, event_id: int) -> None:
    """Pre-commit guard: bookings may only reference existing events"""
    if not EventRepo.exists(db, event_id):
        raise EventReferenceError(event_id)


class BookingRepo:
    @staticmethod
    def create(db: Session, event_id: int, email: str) -> Booking:
        """Book ``email`` onto an event.

        Raises InvalidEmailError, EventReferenceError or
        DuplicateBookingError. Nothing is written when a check fails.
        """
        email = validate_email(email)
        ensure_event_exists(db, event_id)

        booking = Booking(event_id=event_id, email=email)
        db.add(booking)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateBookingError(event_id, email) from exc
        db.refresh(booking)
        return booking

    @staticmethod
    def count_for_event(db: Session, event_id: int) -> int:
        return db.query(func.count(Booking.id)).filter(Booking.event_id == event_id).scalar() or 0

    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Booking]:
        return db.query(Booking).filter(Booking.event_id == event_id).order_by(Booking.created_at).all()
