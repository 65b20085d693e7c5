"""
Certificate Model
One row per issued certificate
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
import uuid
from app.database import Base


class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)

    # Participant
    participant_name = Column(String(200), nullable=False)
    participant_email = Column(String(255), nullable=False, index=True)

    # Public verification token
    certificate_uuid = Column(String(36), nullable=False, unique=True, index=True)

    # Rendered artifact, computed once at issuance
    cloudinary_url = Column(Text, nullable=False)

    downloaded = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", backref="certificates")
