"""
Event API routes
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import DuplicateSlugError, ImageUploadError
from app.schemas.event import EventForm, EventResponse
from app.services.media_service import ImageUploadService
from app.services.repositories import EventRepo
from app.utils.responses import error_response, json_response
from app.utils.slugs import normalize_slug

logger = logging.getLogger(__name__)

router = APIRouter()

def get_image_uploader() -> ImageUploadService:
    return ImageUploadService()

def serialize_event(event) -> dict:
    return EventResponse.model_validate(event).model_dump(mode="json")

@router.post("/events")
async def create_event(
    request: Request,
    db: Session = Depends(get_db),
    uploader: ImageUploadService = Depends(get_image_uploader)
):
    """Create an event from a multipart submission with an image"""
    try:
        try:
            form = await request.form()
        except Exception as e:
            return json_response(
                {"message": "Event creation failed", "error": f"Malformed form data: {e}"},
                status_code=status.HTTP_400_BAD_REQUEST
            )

        image = form.get("image")
        if not isinstance(image, UploadFile) or not image.filename:
            return json_response(
                {"message": "Image file is required"},
                status_code=status.HTTP_400_BAD_REQUEST
            )

        try:
            payload = EventForm.from_form(form)
        except ValidationError as e:
            return json_response(
                {
                    "message": "Event creation failed",
                    "error": "Invalid event fields",
                    "details": e.errors(include_url=False, include_context=False),
                },
                status_code=status.HTTP_400_BAD_REQUEST
            )

        content = await image.read()
        if not content:
            return json_response(
                {"message": "Image file is required"},
                status_code=status.HTTP_400_BAD_REQUEST
            )
        if len(content) > settings.MAX_UPLOAD_SIZE:
            return json_response(
                {"message": "Event creation failed", "error": "Image file is too large"},
                status_code=status.HTTP_400_BAD_REQUEST
            )

        image_url = await uploader.upload(content, image.filename, image.content_type)

        event = await run_in_threadpool(EventRepo.create, db, {**payload.model_dump(), "image": image_url})

        return json_response(
            {"message": "Event created successfully", "event": serialize_event(event)},
            status_code=status.HTTP_201_CREATED
        )

    except DuplicateSlugError as e:
        return json_response(
            {"message": "Event creation failed", "error": e.message},
            status_code=status.HTTP_409_CONFLICT
        )
    except ImageUploadError as e:
        logger.error(f"Event creation failed, image upload error: {e.reason}")
        return json_response(
            {"message": "Event creation failed", "error": e.message},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    except Exception:
        logger.exception("Event creation failed")
        return json_response(
            {"message": "Event creation failed", "error": "An unexpected error occurred"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

@router.get("/events")
def list_events(db: Session = Depends(get_db)):
    """List all events, newest first"""
    try:
        events = EventRepo.list_all(db)
        return json_response({"events": [serialize_event(event) for event in events]})
    except Exception:
        logger.exception("Event retrieval failed")
        return json_response(
            {"message": "Event retrieval failed", "error": "An unexpected error occurred"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

@router.get("/events/{slug}")
def get_event_by_slug(slug: str, db: Session = Depends(get_db)):
    """Fetch a single event by its slug"""
    try:
        if not slug or not slug.strip():
            return error_response(
                error="Slug parameter is required and must be a non-empty string",
                status_code=status.HTTP_400_BAD_REQUEST
            )

        sanitized_slug = normalize_slug(slug)
        event = EventRepo.find_by_slug(db, sanitized_slug)

        if not event:
            return error_response(
                error=f'Event with slug "{sanitized_slug}" not found',
                status_code=status.HTTP_404_NOT_FOUND
            )

        return json_response({"success": True, "event": serialize_event(event)})

    except Exception:
        logger.exception(f"Error fetching event by slug: {slug!r}")
        return error_response(
            error="An unexpected error occurred while fetching the event",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
