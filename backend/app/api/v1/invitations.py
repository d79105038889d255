"""Invitation generation and editing API router.

POST /api/v1/invitations/generate      — Get or generate a guest's invitation
PUT  /api/v1/invitations/{guest_id}    — Save an edit, optionally rewritten from feedback
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_invitation_service
from app.invitations import errors
from app.invitations.service import InvitationService, InvitationSource
from app.schemas.invitation import (
    GenerateInvitationRequest,
    GenerateInvitationResponse,
    UpdateInvitationRequest,
    UpdateInvitationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/invitations", tags=["invitations"])

_MESSAGES = {
    InvitationSource.CACHE: "Invitation retrieved",
    InvitationSource.DATABASE: "Invitation already exists",
    InvitationSource.NEWLY_GENERATED: "Invitation generated",
}


def to_http_exception(exc: errors.InvitationError) -> HTTPException:
    """Translate an orchestrator error into the matching HTTP error."""
    if isinstance(exc, errors.StatusTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, errors.ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, errors.NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    if isinstance(exc, errors.DataIntegrityError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Guest data is incomplete: its couple profile is missing",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Invitation request failed",
    )


@router.post(
    "/generate",
    response_model=GenerateInvitationResponse,
    summary="Generate a guest's invitation",
)
async def generate_invitation(
    body: GenerateInvitationRequest,
    force: bool = Query(False, description="Regenerate even if an invitation exists"),
    service: InvitationService = Depends(get_invitation_service),
) -> dict:
    """Return the guest's invitation, generating it with AI (or a template) if needed."""
    try:
        result = await service.generate(body.guest_id, force=force)
    except errors.InvitationError as exc:
        raise to_http_exception(exc) from exc

    message = _MESSAGES[result.source]
    if result.warning:
        message = "Invitation generated but could not be saved"
    return {
        "message": message,
        "invitation": result.text,
        "source": result.source,
        "generator": result.generator,
        "warning": result.warning,
    }


@router.put(
    "/{guest_id}",
    response_model=UpdateInvitationResponse,
    summary="Update a guest's invitation",
)
async def update_invitation(
    guest_id: str,
    body: UpdateInvitationRequest,
    service: InvitationService = Depends(get_invitation_service),
) -> dict:
    """Save edited invitation text and mark the guest ``edited``.

    With ``feedback_text`` the AI merges the feedback into the text; if that
    fails the submitted text is saved unchanged and ``feedback_status`` says so.
    """
    try:
        result = await service.revise(guest_id, body.invitation_content, body.feedback_text)
    except errors.InvitationError as exc:
        raise to_http_exception(exc) from exc

    message = "Invitation updated"
    if result.warning:
        message = "Invitation updated but could not be saved"
    return {
        "message": message,
        "guest": result.guest,
        "invitation": result.text,
        "feedback_status": result.feedback_status,
        "warning": result.warning,
    }
