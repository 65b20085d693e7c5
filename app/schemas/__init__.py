"""
Pydantic schemas for request/response validation
"""

from app.schemas.event import (
    CreateEventRequest,
    EventResponse,
    CreateEventResponse,
    EventListResponse
)

__all__ = [
    "CreateEventRequest",
    "EventResponse",
    "CreateEventResponse",
    "EventListResponse",
]
