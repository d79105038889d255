"""Guest domain model."""

import enum
import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.orm import relationship as orm_relationship  # `relationship` is also a column name

from app.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class GuestStatus(str, enum.Enum):
    """Invitation lifecycle of a guest: pending → generated → edited → sent."""

    PENDING = "pending"
    GENERATED = "generated"
    EDITED = "edited"
    SENT = "sent"


class Guest(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Guest model — people invited to the wedding."""

    __tablename__ = "guests"

    couple_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("couple_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255))
    relationship: Mapped[str] = mapped_column(String(100))  # 朋友, 家人, 同事, ...
    email: Mapped[str] = mapped_column(String(255), index=True)
    preferences: Mapped[str | None] = mapped_column(Text)
    how_met: Mapped[str | None] = mapped_column(Text)
    memories: Mapped[str | None] = mapped_column(Text)
    invitation_content: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(20), default=GuestStatus.PENDING.value, server_default=GuestStatus.PENDING.value
    )

    # Relationships
    couple: Mapped["CoupleProfile | None"] = orm_relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="guests", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Guest(id={self.id}, name={self.name!r}, status={self.status!r})>"
