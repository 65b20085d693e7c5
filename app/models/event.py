"""
Event Model
Certificate template configuration, one per campaign
"""

from sqlalchemy import Column, String, Integer, DateTime, Text, func
import uuid
from app.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)

    # Cloudinary public id of the template image
    template_url = Column(Text, nullable=False)

    # Text anchor in original template pixels
    text_x = Column(Integer, nullable=False, default=0)
    text_y = Column(Integer, nullable=False, default=0)

    # Font
    font_size = Column(Integer, nullable=False, default=50)
    font_family = Column(String(100), nullable=False, default="Roboto")
    font_color = Column(String(6), nullable=False, default="000000")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
