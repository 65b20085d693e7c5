"""
Email Request/Response Models
"""

from pydantic import BaseModel, Field, AliasChoices, EmailStr
from typing import List, Optional
from datetime import datetime


class SendEmailRequest(BaseModel):
    """Single certificate notification"""
    to: EmailStr
    participant_name: str = Field(..., min_length=1, validation_alias=AliasChoices("participantName", "participant_name"))
    event_name: str = Field(..., min_length=1, validation_alias=AliasChoices("eventName", "event_name"))
    certificate_url: str = Field(..., min_length=1, validation_alias=AliasChoices("certificateUrl", "certificate_url"))
    verification_url: str = Field(..., min_length=1, validation_alias=AliasChoices("verificationUrl", "verification_url"))
    custom_message: Optional[str] = Field(default=None, validation_alias=AliasChoices("customMessage", "custom_message"))


class SendEmailResponse(BaseModel):
    success: bool
    message_id: Optional[str] = Field(default=None, serialization_alias="messageId")


class EmailDeliveryResponse(BaseModel):
    id: str
    certificate_id: Optional[str] = None
    recipient: str
    subject: str
    status: str
    attempts: int
    message_id: Optional[str] = None
    last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EmailDeliveryListResponse(BaseModel):
    total: int
    deliveries: List[EmailDeliveryResponse]


class RetryResponse(BaseModel):
    attempted: int
    sent: int
    failed: int


class UploadResponse(BaseModel):
    success: bool
    public_id: str = Field(serialization_alias="publicId")
    url: str


class QRCodeResponse(BaseModel):
    success: bool
    qr_code: str = Field(serialization_alias="qrCode")
