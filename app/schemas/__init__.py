"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .booking import *

__all__ = [
    "ErrorResponse",
    "EventForm",
    "EventResponse",
    "BookingCreate",
    "BookingResponse",
]
