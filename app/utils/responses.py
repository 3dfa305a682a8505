"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.core.errors import ErrorCode
from app.schemas.common import ErrorResponse

# Status codes for domain errors surfaced by the API
DOMAIN_ERROR_STATUS = {
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_BOOKING: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_SLUG: status.HTTP_409_CONFLICT,
    ErrorCode.IMAGE_UPLOAD_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    """JSON response with datetimes and models encoded"""
    return JSONResponse(
        content=jsonable_encoder(content),
        status_code=status_code
    )

def error_response(
    error: str,
    message: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        error=error,
        message=message,
        details=details
    )
    return JSONResponse(
        content=response.model_dump(exclude_none=True),
        status_code=status_code
    )
