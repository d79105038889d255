"""Tests for the SQLAlchemy guest repository."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.invitations.errors import PersistenceError
from app.invitations.repository import SQLAlchemyGuestRepository
from app.models.couple import CoupleProfile


async def test_find_loads_couple(db_session: AsyncSession, test_couple: CoupleProfile, make_guest):
    guest = await make_guest(test_couple.id)

    found = await SQLAlchemyGuestRepository(db_session).find(guest.id)

    assert found is not None
    assert found.couple.groom_name == "陳大文"


async def test_find_unknown_guest(db_session: AsyncSession):
    assert await SQLAlchemyGuestRepository(db_session).find(uuid.uuid4()) is None


async def test_update_sets_fields(db_session: AsyncSession, test_couple: CoupleProfile, make_guest):
    guest = await make_guest(test_couple.id)

    saved = await SQLAlchemyGuestRepository(db_session).update(
        guest.id, invitation_content="邀請函", status="generated"
    )

    assert saved.id == guest.id
    assert saved.invitation_content == "邀請函"
    assert saved.status == "generated"


async def test_update_vanished_guest_is_persistence_error(db_session: AsyncSession):
    with pytest.raises(PersistenceError, match="no longer exists"):
        await SQLAlchemyGuestRepository(db_session).update(uuid.uuid4(), status="generated")
