"""
Certificate Service
Business logic for certificate issuance, lookup and verification
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException, status

from app.config import settings
from app.database import database
from app.services.cloudinary_service import generate_certificate_url
from app.services.event_service import EventService

logger = logging.getLogger("certificate_pro.certificates")

CERTIFICATE_SELECT = """
    SELECT c.id, c.event_id, c.participant_name, c.participant_email,
           c.certificate_uuid, c.cloudinary_url, c.downloaded, c.created_at,
           e.name AS event_name
    FROM certificates c
    JOIN events e ON e.id = c.event_id
"""


def build_verification_url(certificate_uuid: str) -> str:
    return f"{settings.APP_URL.rstrip('/')}/verify/{certificate_uuid}"


class CertificateService:
    """Service for certificate operations"""

    @staticmethod
    async def generate_certificates(event_id: str, participants: List[dict]) -> List[dict]:
        """
        Issue one certificate per participant for an event

        Every participant gets a fresh public identifier; the artifact URL is
        composed from the event's stored configuration. All rows are inserted
        in a single transaction.

        Raises:
            HTTPException 404: event does not exist (nothing is inserted)
            HTTPException 500: store rejected the batch
        """
        event = await EventService.get_event(event_id)

        issued_at = datetime.now(timezone.utc)
        rows = []
        for participant in participants:
            rows.append({
                "id": str(uuid.uuid4()),
                "event_id": event_id,
                "participant_name": participant["name"],
                "participant_email": participant["email"],
                "certificate_uuid": str(uuid.uuid4()),
                "cloudinary_url": generate_certificate_url(
                    event["template_url"],
                    participant["name"],
                    event["text_x"],
                    event["text_y"],
                    event["font_size"],
                    event["font_family"],
                    event["font_color"]
                ),
                "downloaded": False,
                "created_at": issued_at
            })

        if not rows:
            return []

        try:
            async with database.transaction():
                await database.execute_many(
                    """
                    INSERT INTO certificates
                    (id, event_id, participant_name, participant_email, certificate_uuid,
                     cloudinary_url, downloaded, created_at)
                    VALUES (:id, :event_id, :participant_name, :participant_email, :certificate_uuid,
                            :cloudinary_url, :downloaded, :created_at)
                    """,
                    rows
                )
        except Exception as e:
            logger.exception("Certificate batch insert failed for event %s", event_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e)
            )

        logger.info("Issued %d certificates for event %s", len(rows), event_id)

        for row in rows:
            row["event_name"] = event["name"]
        return rows

    @staticmethod
    async def search_certificates(
        email: Optional[str] = None,
        event_id: Optional[str] = None
    ) -> List[dict]:
        """
        Certificates newest first, optionally filtered

        Email is compared as an exact string.
        """
        conditions = []
        params = {}
        if email:
            conditions.append("c.participant_email = :email")
            params["email"] = email
        if event_id:
            conditions.append("c.event_id = :event_id")
            params["event_id"] = event_id

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        rows = await database.fetch_all(
            f"{CERTIFICATE_SELECT} {where} ORDER BY c.created_at DESC",
            params
        )
        return [dict(row) for row in rows]

    @staticmethod
    async def verify_certificate(certificate_uuid: str) -> Optional[dict]:
        """Resolve a public identifier; None when it was never issued"""
        row = await database.fetch_one(
            f"{CERTIFICATE_SELECT} WHERE c.certificate_uuid = :certificate_uuid",
            {"certificate_uuid": certificate_uuid}
        )
        if not row:
            logger.info("Verification failed for %s", certificate_uuid)
            return None
        return dict(row)

    @staticmethod
    async def mark_downloaded(certificate_id: str) -> None:
        """Set the downloaded flag; repeat calls are no-ops"""
        try:
            await database.execute(
                "UPDATE certificates SET downloaded = :downloaded WHERE id = :certificate_id",
                {"downloaded": True, "certificate_id": certificate_id}
            )
        except Exception as e:
            logger.exception("Failed to mark certificate %s downloaded", certificate_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e)
            )

    @staticmethod
    async def get_stats() -> dict:
        """Issuance and download counts, overall and per event"""
        total_events = await database.fetch_val("SELECT COUNT(*) FROM events")
        total_certificates = await database.fetch_val("SELECT COUNT(*) FROM certificates")
        downloaded = await database.fetch_val(
            "SELECT COUNT(*) FROM certificates WHERE downloaded = :downloaded",
            {"downloaded": True}
        )

        event_rows = await database.fetch_all(
            """
            SELECT e.id, e.name, COUNT(c.id) AS certificates
            FROM events e
            LEFT JOIN certificates c ON c.event_id = e.id
            GROUP BY e.id, e.name, e.created_at
            ORDER BY e.created_at DESC
            """
        )

        total_certificates = total_certificates or 0
        downloaded = downloaded or 0
        return {
            "total_events": total_events or 0,
            "total_certificates": total_certificates,
            "downloaded": downloaded,
            "pending": total_certificates - downloaded,
            "download_rate": round(downloaded / total_certificates * 100, 1) if total_certificates else 0.0,
            "event_stats": [
                {"event_id": row["id"], "name": row["name"], "certificates": row["certificates"]}
                for row in event_rows
            ]
        }


# Create singleton instance
certificate_service = CertificateService()
