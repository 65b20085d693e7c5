"""
Notification Routes
Single certificate emails and the delivery outbox
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth import require_admin
from app.schemas.email import (
    EmailDeliveryListResponse,
    RetryResponse,
    SendEmailRequest,
    SendEmailResponse,
)
from app.services.email_service import EmailService
from app.services.notification_service import NotificationService

router = APIRouter()


@router.post("/send-email", response_model=SendEmailResponse)
async def send_email(
    request: SendEmailRequest,
    _: bool = Depends(require_admin)
):
    """Send one certificate email"""
    message_id = await EmailService.send_certificate_email(
        to=request.to,
        participant_name=request.participant_name,
        event_name=request.event_name,
        certificate_url=request.certificate_url,
        verification_url=request.verification_url,
        custom_message=request.custom_message
    )
    return {"success": True, "message_id": message_id}


@router.get("/email-deliveries", response_model=EmailDeliveryListResponse)
async def list_email_deliveries(
    status_filter: Optional[str] = Query(default=None, alias="status", pattern="^(pending|sent|failed)$"),
    _: bool = Depends(require_admin)
):
    """Outbox entries, newest first"""
    deliveries = await NotificationService.list_deliveries(status_filter)
    return {"total": len(deliveries), "deliveries": deliveries}


@router.post("/email-deliveries/retry", response_model=RetryResponse)
async def retry_email_deliveries(_: bool = Depends(require_admin)):
    """Re-send every failed certificate email once"""
    return await NotificationService.retry_failed()
