"""Pydantic v2 request/response schemas for guest endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.guest import GuestStatus
from app.schemas.couple import CoupleResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestFields(BaseModel):
    """Guest details supplied by the couple."""

    name: str = Field(..., min_length=1, max_length=255)
    relationship: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    preferences: str | None = None
    how_met: str | None = None
    memories: str | None = None


class GuestCreate(GuestFields):
    """Schema for creating a new guest."""

    couple_id: uuid.UUID


class GuestBulkCreate(BaseModel):
    """Schema for importing several guests for one couple."""

    couple_id: uuid.UUID
    guests: list[GuestFields] = Field(..., min_length=1, max_length=500)


class GuestUpdate(BaseModel):
    """Schema for partially updating a guest. All fields optional.

    Invitation text and status are managed by the invitation endpoints.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    relationship: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    preferences: str | None = None
    how_met: str | None = None
    memories: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class GuestResponse(BaseModel):
    """Guest information returned by the API."""

    id: uuid.UUID
    couple_id: uuid.UUID
    name: str
    relationship: str
    email: str
    preferences: str | None = None
    how_met: str | None = None
    memories: str | None = None
    invitation_content: str | None = None
    status: GuestStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GuestDetailResponse(GuestResponse):
    """Guest with the couple profile it belongs to."""

    couple: CoupleResponse | None = None


class GuestListResponse(BaseModel):
    """Paginated list of guests."""

    items: list[GuestResponse]
    total: int
