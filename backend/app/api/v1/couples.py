"""Couple profile API router.

A deployment serves one wedding: creating a profile when one already exists
updates it in place.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.models.couple import CoupleProfile
from app.schemas.couple import CoupleCreate, CoupleResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/couple", tags=["couple"])


async def get_active_couple(db: AsyncSession) -> CoupleProfile | None:
    """Return the deployment's couple profile, if one has been created."""
    result = await db.execute(
        select(CoupleProfile).order_by(CoupleProfile.created_at, CoupleProfile.id).limit(1)
    )
    return result.scalar_one_or_none()


@router.post(
    "",
    response_model=CoupleResponse,
    summary="Create or update the couple profile",
)
async def save_couple(
    body: CoupleCreate,
    db: AsyncSession = Depends(get_db),
) -> CoupleProfile:
    """Create the couple profile, or update the existing one in place."""
    couple = await get_active_couple(db)

    if couple is None:
        couple = CoupleProfile(**body.model_dump())
        db.add(couple)
        action = "created"
    else:
        for field, value in body.model_dump().items():
            setattr(couple, field, value)
        action = "updated"

    await db.flush()
    await db.refresh(couple)
    logger.info("Couple profile %s (%s)", action, couple.id)
    return couple


@router.get(
    "",
    response_model=CoupleResponse,
    summary="Get the couple profile",
)
async def get_couple(db: AsyncSession = Depends(get_db)) -> CoupleProfile:
    couple = await get_active_couple(db)
    if couple is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Couple profile has not been set up",
        )
    return couple


@router.get(
    "/{couple_id}",
    response_model=CoupleResponse,
    summary="Get a couple profile by ID",
)
async def get_couple_by_id(
    couple_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> CoupleProfile:
    couple = await db.get(CoupleProfile, couple_id)
    if couple is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Couple profile not found",
        )
    return couple
