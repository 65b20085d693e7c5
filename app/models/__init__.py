"""
Database Models
Import all models here for Alembic migrations
"""

from app.models.event import Event
from app.models.certificate import Certificate
from app.models.email_delivery import EmailDelivery

__all__ = [
    "Event",
    "Certificate",
    "EmailDelivery",
]
