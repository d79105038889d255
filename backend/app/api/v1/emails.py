"""Invitation e-mail API router.

POST /api/v1/emails/send/{guest_id}  — E-mail one guest their invitation
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_db, get_mailer
from app.mail.sender import InvitationMailer
from app.mail.templates import render_invitation_email
from app.models.guest import Guest, GuestStatus
from app.schemas.email import SendInvitationResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/emails", tags=["emails"])

SENDABLE_STATUSES = {GuestStatus.GENERATED.value, GuestStatus.EDITED.value}


@router.post(
    "/send/{guest_id}",
    response_model=SendInvitationResponse,
    summary="Send one guest's invitation",
)
async def send_invitation(
    guest_id: uuid.UUID,
    test_mode: bool = Query(False, description="Render the e-mail but do not deliver it"),
    db: AsyncSession = Depends(get_db),
    mailer: InvitationMailer = Depends(get_mailer),
) -> dict:
    """E-mail the guest their invitation and mark them ``sent``.

    In test mode the message is rendered but not delivered and the status
    is left unchanged.
    """
    if not test_mode and not mailer.is_configured:
        logger.error("Send invitation failed: SMTP is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="E-mail delivery is not configured",
        )

    result = await db.execute(
        select(Guest).where(Guest.id == guest_id).options(selectinload(Guest.couple))
    )
    guest = result.scalar_one_or_none()
    if guest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    if guest.couple is None:
        logger.error("Guest %s references missing couple profile %s", guest.id, guest.couple_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Guest data is incomplete: its couple profile is missing",
        )
    if guest.status == GuestStatus.SENT.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Invitation has already been sent",
        )
    if not guest.invitation_content or guest.status not in SENDABLE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Guest has no invitation yet; generate one first",
        )

    message = render_invitation_email(
        guest.couple, guest, guest.invitation_content, mailer.from_address
    )
    recipient = {"id": guest.id, "name": guest.name, "email": guest.email}

    if test_mode:
        logger.info("Test mode: simulated invitation e-mail to %s <%s>", guest.name, guest.email)
        return {"message": "Test mode: e-mail rendered, not sent", "guest": recipient, "test_mode": True}

    try:
        await mailer.send(message)
    except Exception as exc:
        logger.exception("Failed to send invitation to %s", guest.email)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="E-mail delivery failed",
        ) from exc

    guest.status = GuestStatus.SENT.value
    await db.flush()
    logger.info("Invitation sent to %s <%s>", guest.name, guest.email)
    return {"message": "Invitation sent", "guest": recipient}
