"""
Public Endpoints
Certificate verification and QR codes
"""

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse
from qrcode.exceptions import DataOverflowError

from app.schemas.certificate import CertificateResponse, VerifyResponse
from app.schemas.email import QRCodeResponse
from app.services.certificate_service import CertificateService, build_verification_url
from app.services.cloudinary_service import get_download_url
from app.services.qrcode_service import VERIFY_QR_SIZE, create_qr_data_url

router = APIRouter()


@router.get("/qrcode", response_model=QRCodeResponse)
async def get_qrcode(url: str = Query(default="", description="URL to encode")):
    """Generate a QR code as a PNG data URL"""
    if not url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL parameter required"
        )

    try:
        qr_code = create_qr_data_url(url)
    except (ValueError, DataOverflowError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or "Data too long for a QR code"
        )
    return {"success": True, "qr_code": qr_code}


@router.get("/verify/{certificate_uuid}", response_model=VerifyResponse, response_model_exclude_none=True)
async def verify_certificate(certificate_uuid: str):
    """Verify a certificate by its public identifier"""
    certificate = await CertificateService.verify_certificate(certificate_uuid)
    if not certificate:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"valid": False})

    verification_url = build_verification_url(certificate_uuid)
    return {
        "valid": True,
        "certificate": CertificateResponse(**certificate),
        "verification_url": verification_url,
        "download_url": get_download_url(certificate["cloudinary_url"]),
        "qr_code": create_qr_data_url(verification_url, size=VERIFY_QR_SIZE)
    }
