"""
Event Routes
Certificate template configuration and template image upload
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.auth import require_admin
from app.config import settings
from app.schemas.event import CreateEventRequest, CreateEventResponse, EventListResponse
from app.schemas.email import UploadResponse
from app.services.cloudinary_service import CloudinaryService
from app.services.event_service import EventService

router = APIRouter()


@router.post("/events", response_model=CreateEventResponse)
async def create_event(
    request: CreateEventRequest,
    _: bool = Depends(require_admin)
):
    """
    Create an event (certificate template configuration)

    - **templateUrl**: Cloudinary public id of the uploaded template
    - **textX / textY**: name anchor in original template pixels
    - **fontSize / fontFamily / fontColor**: overlay styling, color as hex without '#'
    """
    event = await EventService.create_event(request)
    return {"success": True, "event": event}


@router.get("/events", response_model=EventListResponse)
async def list_events():
    """List events, newest first"""
    return {"events": await EventService.list_events()}


@router.post("/upload", response_model=UploadResponse)
async def upload_template(
    file: UploadFile = File(...),
    _: bool = Depends(require_admin)
):
    """Upload a template image to Cloudinary"""
    allowed_types = {t.strip() for t in settings.ALLOWED_IMAGE_TYPES.split(",") if t.strip()}
    if file.content_type not in allowed_types:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Template must be a PNG or JPG image"
        )

    content = await file.read()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty"
        )
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large (max {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB)"
        )

    uploaded = await CloudinaryService.upload_template(content, file.filename, file.content_type)
    return {"success": True, "public_id": uploaded["public_id"], "url": uploaded["url"]}
