"""
Certificate Request/Response Models
"""

from pydantic import BaseModel, Field, AliasChoices, computed_field
from typing import List, Optional
from datetime import datetime

from app.services.certificate_service import build_verification_url
from app.services.cloudinary_service import get_download_url


class ParticipantRequest(BaseModel):
    """Single participant record"""
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=255)


class GenerateCertificatesRequest(BaseModel):
    """Bulk certificate generation for one event"""
    event_id: str = Field(..., min_length=1, validation_alias=AliasChoices("eventId", "event_id"))
    participants: List[ParticipantRequest] = Field(default_factory=list)
    send_emails: bool = Field(default=False, validation_alias=AliasChoices("sendEmails", "send_emails"))
    custom_message: Optional[str] = Field(default=None, validation_alias=AliasChoices("customMessage", "custom_message"))

    class Config:
        json_schema_extra = {
            "example": {
                "eventId": "3f0c6a1e-6c53-4c8e-a1f4-2f3a9a3b8c11",
                "participants": [{"name": "Ada Lovelace", "email": "ada@example.com"}],
                "sendEmails": False
            }
        }


class CertificateResponse(BaseModel):
    """Issued certificate"""
    id: str
    event_id: str
    participant_name: str
    participant_email: str
    certificate_uuid: str
    cloudinary_url: str
    downloaded: bool
    created_at: Optional[datetime] = None
    event_name: Optional[str] = None

    @computed_field
    @property
    def download_url(self) -> str:
        return get_download_url(self.cloudinary_url)

    @computed_field
    @property
    def verification_url(self) -> str:
        return build_verification_url(self.certificate_uuid)


class EmailSummary(BaseModel):
    sent: int
    failed: int


class SkippedRow(BaseModel):
    row: int
    error: str


class GenerateCertificatesResponse(BaseModel):
    success: bool
    count: int
    certificates: List[CertificateResponse]
    emails: Optional[EmailSummary] = None
    message: Optional[str] = None
    skipped: List[SkippedRow] = Field(default_factory=list)


class CertificateListResponse(BaseModel):
    certificates: List[CertificateResponse]


class DownloadRequest(BaseModel):
    certificate_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("certificateId", "certificate_id"))


class SuccessResponse(BaseModel):
    success: bool


class VerifyResponse(BaseModel):
    """Public verification result; only `valid` is set when the id is unknown"""
    valid: bool
    certificate: Optional[CertificateResponse] = None
    verification_url: Optional[str] = Field(default=None, serialization_alias="verificationUrl")
    download_url: Optional[str] = Field(default=None, serialization_alias="downloadUrl")
    qr_code: Optional[str] = Field(default=None, serialization_alias="qrCode")


class EventStat(BaseModel):
    event_id: str = Field(serialization_alias="eventId")
    name: str
    certificates: int


class AnalyticsResponse(BaseModel):
    total_events: int = Field(serialization_alias="totalEvents")
    total_certificates: int = Field(serialization_alias="totalCertificates")
    downloaded: int
    pending: int
    download_rate: float = Field(serialization_alias="downloadRate")
    event_stats: List[EventStat] = Field(serialization_alias="eventStats")
