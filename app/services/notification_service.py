"""
Notification Service
Email outbox for issued certificates
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException

from app.database import database
from app.services.certificate_service import build_verification_url
from app.services.cloudinary_service import get_download_url
from app.services.email_service import EmailService, certificate_subject

logger = logging.getLogger("certificate_pro.notifications")

PARTIAL_FAILURE_MESSAGE = "Certificates generated but some emails failed to send."


class NotificationService:
    """
    Best-effort certificate emails

    Each message gets an email_deliveries row before it is sent so failures
    stay visible and can be retried; issuance is never rolled back.
    """

    @staticmethod
    async def _enqueue(certificate: dict, event_name: str, custom_message: Optional[str]) -> str:
        delivery_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        await database.execute(
            """
            INSERT INTO email_deliveries
            (id, certificate_id, recipient, subject, status, attempts, custom_message, created_at, updated_at)
            VALUES (:id, :certificate_id, :recipient, :subject, 'pending', 0, :custom_message, :created_at, :updated_at)
            """,
            {
                "id": delivery_id,
                "certificate_id": certificate["id"],
                "recipient": certificate["participant_email"],
                "subject": certificate_subject(event_name),
                "custom_message": custom_message,
                "created_at": now,
                "updated_at": now
            }
        )
        return delivery_id

    @staticmethod
    async def _deliver(delivery_id: str, certificate: dict, event_name: str, custom_message: Optional[str]) -> bool:
        try:
            message_id = await EmailService.send_certificate_email(
                to=certificate["participant_email"],
                participant_name=certificate["participant_name"],
                event_name=event_name,
                certificate_url=get_download_url(certificate["cloudinary_url"]),
                verification_url=build_verification_url(certificate["certificate_uuid"]),
                custom_message=custom_message
            )
        except Exception as e:
            error = e.detail if isinstance(e, HTTPException) else str(e)
            logger.warning("Email to %s failed: %s", certificate["participant_email"], error)
            await database.execute(
                """
                UPDATE email_deliveries
                SET status = 'failed', attempts = attempts + 1, last_error = :error, updated_at = :now
                WHERE id = :id
                """,
                {"id": delivery_id, "error": str(error), "now": datetime.now(timezone.utc)}
            )
            return False

        await database.execute(
            """
            UPDATE email_deliveries
            SET status = 'sent', attempts = attempts + 1, message_id = :message_id,
                last_error = NULL, updated_at = :now
            WHERE id = :id
            """,
            {"id": delivery_id, "message_id": message_id, "now": datetime.now(timezone.utc)}
        )
        return True

    @staticmethod
    async def notify_certificates(
        certificates: List[dict],
        event_name: str,
        custom_message: Optional[str] = None
    ) -> dict:
        """
        Email every certificate concurrently and wait for all sends to settle

        A certificate whose outbox row cannot be written is counted as failed
        and not sent.

        Returns:
            {"sent": int, "failed": int}
        """
        queued = []
        for cert in certificates:
            try:
                delivery_id = await NotificationService._enqueue(cert, event_name, custom_message)
            except Exception:
                logger.exception("Could not queue email for %s", cert["participant_email"])
                continue
            queued.append((delivery_id, cert))

        results = await asyncio.gather(
            *[
                NotificationService._deliver(delivery_id, cert, event_name, custom_message)
                for delivery_id, cert in queued
            ],
            return_exceptions=True
        )

        sent = sum(1 for result in results if result is True)
        failed = len(certificates) - sent
        logger.info("Certificate emails for %s: %d sent, %d failed", event_name, sent, failed)
        return {"sent": sent, "failed": failed}

    @staticmethod
    async def list_deliveries(status_filter: Optional[str] = None) -> List[dict]:
        if status_filter:
            rows = await database.fetch_all(
                "SELECT * FROM email_deliveries WHERE status = :status ORDER BY created_at DESC",
                {"status": status_filter}
            )
        else:
            rows = await database.fetch_all(
                "SELECT * FROM email_deliveries ORDER BY created_at DESC"
            )
        return [dict(row) for row in rows]

    @staticmethod
    async def retry_failed() -> dict:
        """Re-send every failed delivery once"""
        rows = await database.fetch_all(
            """
            SELECT d.id AS delivery_id, d.custom_message,
                   c.id, c.participant_name, c.participant_email,
                   c.certificate_uuid, c.cloudinary_url, e.name AS event_name
            FROM email_deliveries d
            JOIN certificates c ON c.id = d.certificate_id
            JOIN events e ON e.id = c.event_id
            WHERE d.status = 'failed'
            """
        )

        results = await asyncio.gather(
            *[
                NotificationService._deliver(
                    row["delivery_id"], dict(row), row["event_name"], row["custom_message"]
                )
                for row in rows
            ],
            return_exceptions=True
        )

        sent = sum(1 for result in results if result is True)
        return {"attempted": len(rows), "sent": sent, "failed": len(rows) - sent}


# Create singleton instance
notification_service = NotificationService()
