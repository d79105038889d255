"""Pydantic v2 schemas for invitation generation and editing."""

from pydantic import BaseModel, Field

from app.invitations.service import FeedbackStatus, InvitationSource
from app.schemas.guest import GuestResponse


class GenerateInvitationRequest(BaseModel):
    """Request to generate (or fetch) a guest's invitation."""

    # Kept as a string so malformed ids are reported by the generator as 400s.
    guest_id: str = Field(..., min_length=1)


class GenerateInvitationResponse(BaseModel):
    message: str
    invitation: str
    source: InvitationSource
    generator: str | None = None
    warning: str | None = None


class UpdateInvitationRequest(BaseModel):
    """Edited invitation text, optionally with feedback for an AI rewrite."""

    invitation_content: str = Field(..., min_length=1)
    feedback_text: str | None = None


class UpdateInvitationResponse(BaseModel):
    message: str
    guest: GuestResponse | None = None
    invitation: str
    feedback_status: FeedbackStatus
    warning: str | None = None
