"""
Certificate Routes
Bulk generation, participant lookup, download tracking and analytics
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from app.auth import require_admin
from app.schemas.certificate import (
    AnalyticsResponse,
    CertificateListResponse,
    DownloadRequest,
    GenerateCertificatesRequest,
    GenerateCertificatesResponse,
    SuccessResponse,
)
from app.services.certificate_service import CertificateService
from app.services.csv_parser import CSVParser
from app.services.notification_service import NotificationService, PARTIAL_FAILURE_MESSAGE

router = APIRouter()


async def _issue(
    event_id: str,
    participants: List[dict],
    send_emails: bool,
    custom_message: Optional[str],
    skipped: Optional[List[dict]] = None
) -> dict:
    certificates = await CertificateService.generate_certificates(event_id, participants)

    result = {
        "success": True,
        "count": len(certificates),
        "certificates": certificates,
        "skipped": skipped or []
    }

    if send_emails and certificates:
        summary = await NotificationService.notify_certificates(
            certificates,
            certificates[0]["event_name"],
            custom_message
        )
        result["emails"] = summary
        if summary["failed"]:
            result["message"] = PARTIAL_FAILURE_MESSAGE
        else:
            result["message"] = f"Emails sent to {summary['sent']} participants!"

    return result


@router.post("/certificates", response_model=GenerateCertificatesResponse)
async def generate_certificates(
    request: GenerateCertificatesRequest,
    _: bool = Depends(require_admin)
):
    """
    Issue certificates for a list of participants

    Every participant gets a new public identifier, duplicates included.
    Email failures are reported in `emails` and never undo issuance.
    """
    participants = [p.model_dump() for p in request.participants]
    return await _issue(request.event_id, participants, request.send_emails, request.custom_message)


@router.post("/certificates/upload", response_model=GenerateCertificatesResponse)
async def upload_participants(
    event_id: str = Form(...),
    send_emails: bool = Form(False),
    custom_message: Optional[str] = Form(None),
    file: UploadFile = File(...),
    _: bool = Depends(require_admin)
):
    """Issue certificates from a CSV with name and email columns"""
    content = await file.read()
    participants, skipped = CSVParser.parse_participant_csv(content)
    return await _issue(event_id, participants, send_emails, custom_message, skipped)


@router.get("/certificates", response_model=CertificateListResponse)
async def list_certificates(
    email: Optional[str] = Query(default=None, description="Exact participant email"),
    event_id: Optional[str] = Query(default=None, alias="eventId", description="Event ID")
):
    """Certificates newest first, optionally filtered by email and event"""
    certificates = await CertificateService.search_certificates(email=email, event_id=event_id)
    return {"certificates": certificates}


@router.post("/certificates/download", response_model=SuccessResponse)
async def track_download(request: DownloadRequest):
    """Mark a certificate as downloaded"""
    if not request.certificate_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Certificate ID is required"
        )

    await CertificateService.mark_downloaded(request.certificate_id)
    return {"success": True}


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(_: bool = Depends(require_admin)):
    """Issuance and download statistics"""
    return await CertificateService.get_stats()
