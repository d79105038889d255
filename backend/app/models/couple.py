"""Couple profile model — the one wedding this deployment serves."""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class CoupleProfile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """The couple and their wedding details.

    A deployment serves exactly one wedding, so the API treats the first row
    as the active profile and updates it in place.
    """

    __tablename__ = "couple_profiles"

    groom_name: Mapped[str] = mapped_column(String(255), nullable=False)
    bride_name: Mapped[str] = mapped_column(String(255), nullable=False)
    wedding_date: Mapped[date] = mapped_column(Date, nullable=False)
    wedding_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    wedding_location: Mapped[str] = mapped_column(String(255), nullable=False)
    wedding_theme: Mapped[str] = mapped_column(String(255), nullable=False)
    background_story: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    guests: Mapped[list["Guest"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="couple", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return (
            f"<CoupleProfile(id={self.id}, groom={self.groom_name!r}, "
            f"bride={self.bride_name!r}, date={self.wedding_date})>"
        )
