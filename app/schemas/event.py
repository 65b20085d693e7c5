"""
Event Request/Response Models
"""

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import List, Optional
from datetime import datetime


class CreateEventRequest(BaseModel):
    """Request to create an event (certificate template configuration)"""
    name: str = Field(..., min_length=1, max_length=200, description="Event display name")
    template_url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("templateUrl", "template_url"),
        description="Cloudinary public id of the template image"
    )
    text_x: int = Field(..., ge=0, validation_alias=AliasChoices("textX", "text_x"), description="X offset in template pixels")
    text_y: int = Field(..., ge=0, validation_alias=AliasChoices("textY", "text_y"), description="Y offset in template pixels")
    font_size: int = Field(default=50, gt=0, validation_alias=AliasChoices("fontSize", "font_size"))
    font_family: str = Field(default="Roboto", min_length=1, max_length=100, validation_alias=AliasChoices("fontFamily", "font_family"))
    font_color: str = Field(default="000000", validation_alias=AliasChoices("fontColor", "font_color"))

    @field_validator("font_color")
    @classmethod
    def strip_hash(cls, value: str) -> str:
        return value.strip().lstrip("#")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Hackathon 2024",
                "templateUrl": "certificate-templates/hackathon",
                "textX": 400,
                "textY": 250,
                "fontSize": 50,
                "fontFamily": "Roboto",
                "fontColor": "000000"
            }
        }


class EventResponse(BaseModel):
    """Event details"""
    id: str
    name: str
    template_url: str
    text_x: int
    text_y: int
    font_size: int
    font_family: str
    font_color: str
    created_at: Optional[datetime] = None


class CreateEventResponse(BaseModel):
    success: bool
    event: EventResponse


class EventListResponse(BaseModel):
    events: List[EventResponse]
