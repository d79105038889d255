"""Guest storage used by the invitation orchestrator."""

import logging
import uuid
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.invitations.errors import PersistenceError
from app.models.guest import Guest

logger = logging.getLogger(__name__)


class GuestRepository(Protocol):
    """Storage operations the orchestrator needs."""

    async def find(self, guest_id: uuid.UUID) -> Guest | None: ...

    async def update(self, guest_id: uuid.UUID, **fields: Any) -> Guest: ...


class SQLAlchemyGuestRepository:
    """``GuestRepository`` over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find(self, guest_id: uuid.UUID) -> Guest | None:
        """Load a guest together with its couple profile."""
        result = await self.db.execute(
            select(Guest).where(Guest.id == guest_id).options(selectinload(Guest.couple))
        )
        return result.scalar_one_or_none()

    async def update(self, guest_id: uuid.UUID, **fields: Any) -> Guest:
        """Apply ``fields`` to a guest and flush.

        Raises:
            PersistenceError: if the guest no longer exists or the database
                rejects the write.
        """
        try:
            guest = await self.db.get(Guest, guest_id)
            if guest is None:
                logger.warning("Guest %s vanished before its update was saved", guest_id)
                raise PersistenceError(f"Guest {guest_id} no longer exists")
            for field, value in fields.items():
                setattr(guest, field, value)
            await self.db.flush()
            await self.db.refresh(guest)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update guest %s", guest_id)
            await self.db.rollback()
            raise PersistenceError(f"Could not save guest {guest_id}: {exc}") from exc
        return guest
