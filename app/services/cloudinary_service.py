"""
Cloudinary Service
Certificate URL composition and template image uploads
"""

import hashlib
import logging
import time
from urllib.parse import quote

import httpx
from fastapi import HTTPException, status

from app.config import settings

logger = logging.getLogger("certificate_pro.cloudinary")

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def generate_certificate_url(
    template_public_id: str,
    participant_name: str,
    x: int,
    y: int,
    font_size: int = 50,
    font_family: str = "Roboto",
    font_color: str = "000000"
) -> str:
    """
    Build the Cloudinary delivery URL that overlays the participant name on the template

    Pure function: no validation, identical inputs give identical URLs.
    """
    encoded_name = quote(participant_name, safe=_URI_COMPONENT_SAFE)

    transformations = ",".join([
        f"l_text:{font_family}_{font_size}_bold:{encoded_name}",
        "g_north_west",
        f"x_{x}",
        f"y_{y}",
        f"co_rgb:{font_color}",
    ])

    return (
        f"https://res.cloudinary.com/{settings.CLOUDINARY_CLOUD_NAME}"
        f"/image/upload/{transformations}/{template_public_id}"
    )


def get_download_url(certificate_url: str) -> str:
    """Rewrite a delivery URL so Cloudinary serves it as an attachment"""
    return certificate_url.replace("/upload/", "/upload/fl_attachment/", 1)


class CloudinaryService:
    """Cloudinary upload API helper"""

    @staticmethod
    def _ensure_config():
        if not settings.CLOUDINARY_API_KEY or not settings.CLOUDINARY_API_SECRET:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Cloudinary is not configured"
            )

    @staticmethod
    def sign_params(params: dict, api_secret: str) -> str:
        """Cloudinary signature: sha1 of sorted key=value pairs joined by & plus the secret"""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
        return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()

    @staticmethod
    async def upload_template(content: bytes, filename: str, content_type: str) -> dict:
        """
        Upload a template image with a signed request

        Returns:
            dict with public_id and secure url
        """
        CloudinaryService._ensure_config()

        params = {
            "folder": settings.CLOUDINARY_UPLOAD_FOLDER,
            "timestamp": int(time.time()),
        }
        signature = CloudinaryService.sign_params(params, settings.CLOUDINARY_API_SECRET)

        url = f"https://api.cloudinary.com/v1_1/{settings.CLOUDINARY_CLOUD_NAME}/image/upload"
        data = {**params, "api_key": settings.CLOUDINARY_API_KEY, "signature": signature}
        files = {"file": (filename or "template.png", content, content_type or "application/octet-stream")}

        async with httpx.AsyncClient(timeout=30) as client:
            resp = await client.post(url, data=data, files=files)

        if resp.status_code not in (200, 201):
            logger.error("Cloudinary upload failed: %s %s", resp.status_code, resp.text)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Template upload failed: {resp.text}"
            )

        payload = resp.json()
        logger.info("Uploaded template %s", payload.get("public_id"))
        return {"public_id": payload["public_id"], "url": payload["secure_url"]}


# Create singleton instance
cloudinary_service = CloudinaryService()
