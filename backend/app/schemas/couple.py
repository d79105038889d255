"""Pydantic v2 request/response schemas for the couple profile."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

WEDDING_TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"


class CoupleCreate(BaseModel):
    """Schema for creating or replacing the couple profile."""

    groom_name: str = Field(..., min_length=1, max_length=255)
    bride_name: str = Field(..., min_length=1, max_length=255)
    wedding_date: date
    wedding_time: str = Field(..., pattern=WEDDING_TIME_PATTERN, examples=["18:00"])
    wedding_location: str = Field(..., min_length=1, max_length=255)
    wedding_theme: str = Field(..., min_length=1, max_length=255)
    background_story: str | None = None


class CoupleResponse(BaseModel):
    """Couple profile returned by the API."""

    id: uuid.UUID
    groom_name: str
    bride_name: str
    wedding_date: date
    wedding_time: str
    wedding_location: str
    wedding_theme: str
    background_story: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
