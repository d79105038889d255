"""Guests CRUD API router.

Every guest belongs to the couple profile given at creation. Invitation text
and status are not edited here; see the invitations router.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_db, get_invitation_service
from app.invitations.service import InvitationService
from app.models.couple import CoupleProfile
from app.models.guest import Guest, GuestStatus
from app.schemas.common import MessageResponse
from app.schemas.guest import (
    GuestBulkCreate,
    GuestCreate,
    GuestDetailResponse,
    GuestListResponse,
    GuestResponse,
    GuestUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])


async def _require_couple(db: AsyncSession, couple_id: uuid.UUID) -> CoupleProfile:
    couple = await db.get(CoupleProfile, couple_id)
    if couple is None:
        logger.warning("Couple profile %s not found", couple_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Couple profile not found",
        )
    return couple


async def _get_guest_or_404(db: AsyncSession, guest_id: uuid.UUID) -> Guest:
    result = await db.execute(
        select(Guest).where(Guest.id == guest_id).options(selectinload(Guest.couple))
    )
    guest = result.scalar_one_or_none()

    if guest is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guest not found",
        )

    return guest


@router.post(
    "",
    response_model=GuestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new guest",
)
async def create_guest(
    body: GuestCreate,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Create a guest for an existing couple profile, with status ``pending``.

    Raises 404 if the couple profile does not exist.
    """
    await _require_couple(db, body.couple_id)

    guest = Guest(**body.model_dump(), status=GuestStatus.PENDING.value)
    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    logger.info("Guest created %s (%s)", guest.id, guest.name)
    return guest


@router.post(
    "/bulk",
    response_model=list[GuestResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Import several guests",
)
async def bulk_create_guests(
    body: GuestBulkCreate,
    db: AsyncSession = Depends(get_db),
) -> list[Guest]:
    """Create every guest in the payload for one couple profile."""
    await _require_couple(db, body.couple_id)

    guests = [
        Guest(couple_id=body.couple_id, status=GuestStatus.PENDING.value, **item.model_dump())
        for item in body.guests
    ]
    db.add_all(guests)
    await db.flush()
    for guest in guests:
        await db.refresh(guest)
    logger.info("Imported %d guests for couple %s", len(guests), body.couple_id)
    return guests


@router.get(
    "",
    response_model=GuestListResponse,
    summary="List guests with optional filters",
)
async def list_guests(
    couple_id: uuid.UUID | None = Query(None, description="Only guests of this couple"),
    guest_status: GuestStatus | None = Query(None, alias="status", description="Filter by status"),
    search: str | None = Query(None, description="Search by name or email (case-insensitive)"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(50, ge=1, le=500, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Return a paginated list of guests, newest first."""
    filters = []
    if couple_id is not None:
        filters.append(Guest.couple_id == couple_id)
    if guest_status is not None:
        filters.append(Guest.status == guest_status.value)
    if search:
        search_pattern = f"%{search}%"
        filters.append(
            or_(
                Guest.name.ilike(search_pattern),
                Guest.email.ilike(search_pattern),
            )
        )

    # Count total matching guests
    count_query = select(func.count()).select_from(Guest).where(*filters)
    total = (await db.execute(count_query)).scalar_one()

    # Fetch page
    items_query = (
        select(Guest)
        .where(*filters)
        .order_by(Guest.created_at.desc(), Guest.id)
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(items_query)
    items = list(result.scalars().all())

    return {"items": items, "total": total}


@router.get(
    "/{guest_id}",
    response_model=GuestDetailResponse,
    summary="Get a guest by ID",
)
async def get_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Return a single guest with its couple profile."""
    return await _get_guest_or_404(db, guest_id)


@router.put(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Update a guest",
)
async def update_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Partially update a guest. Only explicitly provided fields are changed."""
    guest = await _get_guest_or_404(db, guest_id)

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(guest, field, value)

    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    logger.info("Guest updated %s", guest_id)
    return guest


@router.delete(
    "/{guest_id}",
    response_model=MessageResponse,
    summary="Delete a guest",
)
async def delete_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    service: InvitationService = Depends(get_invitation_service),
) -> dict:
    """Delete a guest and drop any cached invitation for it."""
    guest = await _get_guest_or_404(db, guest_id)

    await db.delete(guest)
    await db.flush()
    service.forget(guest_id)
    logger.info("Guest deleted %s", guest_id)
    return {"message": "Guest deleted"}
