"""
Email Delivery Model
Outbox of certificate notification emails
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
import uuid
from app.database import Base


class EmailDelivery(Base):
    __tablename__ = "email_deliveries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    certificate_id = Column(String(36), ForeignKey("certificates.id", ondelete="SET NULL"), nullable=True, index=True)

    recipient = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)

    # pending, sent, failed
    status = Column(String(10), nullable=False, default="pending", index=True)
    attempts = Column(Integer, nullable=False, default=0)
    message_id = Column(String(255), nullable=True)
    last_error = Column(Text, nullable=True)

    # Free-text message included in the original send, reused on retry
    custom_message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    certificate = relationship("Certificate", backref="email_deliveries")
