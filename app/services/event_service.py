"""
Event Service
Business logic for certificate template (event) configuration
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from fastapi import HTTPException, status

from app.database import database
from app.schemas.event import CreateEventRequest

logger = logging.getLogger("certificate_pro.events")


class EventService:
    """Service for event operations"""

    @staticmethod
    async def create_event(data: CreateEventRequest) -> dict:
        """
        Store a new event configuration

        Coordinates must already be scaled to the original template resolution.
        """
        event_id = str(uuid.uuid4())

        try:
            await database.execute(
                """
                INSERT INTO events
                (id, name, template_url, text_x, text_y, font_size, font_family, font_color, created_at)
                VALUES (:id, :name, :template_url, :text_x, :text_y, :font_size, :font_family, :font_color, :created_at)
                """,
                {
                    "id": event_id,
                    "name": data.name,
                    "template_url": data.template_url,
                    "text_x": data.text_x,
                    "text_y": data.text_y,
                    "font_size": data.font_size,
                    "font_family": data.font_family,
                    "font_color": data.font_color,
                    "created_at": datetime.now(timezone.utc)
                }
            )
        except Exception as e:
            logger.exception("Failed to create event %s", data.name)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to create event: {str(e)}"
            )

        logger.info("Created event %s (%s)", event_id, data.name)
        return await EventService.get_event(event_id)

    @staticmethod
    async def get_event(event_id: str) -> dict:
        """Get event by ID"""
        event = await database.fetch_one(
            "SELECT * FROM events WHERE id = :event_id",
            {"event_id": event_id}
        )

        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found"
            )

        return dict(event)

    @staticmethod
    async def list_events() -> List[dict]:
        """All events, newest first"""
        rows = await database.fetch_all(
            "SELECT * FROM events ORDER BY created_at DESC"
        )
        return [dict(row) for row in rows]


# Create singleton instance
event_service = EventService()
