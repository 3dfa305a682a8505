"""Domain error codes for events and bookings."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_EMAIL = "INVALID_EMAIL"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    DUPLICATE_BOOKING = "DUPLICATE_BOOKING"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidEmailError(DomainError):
    """Raised when a booking email does not look like local@domain.tld."""

    def __init__(self, email: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EMAIL,
            message="Please provide a valid email address",
        )
        self.email = email


class EventReferenceError(DomainError):
    """Raised when a booking references an event that does not exist."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event with ID {event_id} does not exist",
        )
        self.event_id = event_id


class DuplicateBookingError(DomainError):
    """Raised when the (event, email) pair is already booked."""

    def __init__(self, event_id: int, email: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_BOOKING,
            message="This email is already booked for the event",
        )
        self.event_id = event_id
        self.email = email


class DuplicateSlugError(DomainError):
    """Raised when an event slug is already taken."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_SLUG,
            message=f'Event with slug "{slug}" already exists',
        )
        self.slug = slug


class ImageUploadError(DomainError):
    """Raised when the media host rejects or fails an upload."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.IMAGE_UPLOAD_FAILED,
            message="Image upload failed",
        )
        self.reason = reason
