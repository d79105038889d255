"""SQLAlchemy models for WeddingInvites AI.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from app.models.couple import CoupleProfile
from app.models.guest import Guest, GuestStatus

__all__ = [
    "CoupleProfile",
    "Guest",
    "GuestStatus",
]
