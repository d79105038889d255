"""Shared API dependencies — single import point for all routers.

Process-wide collaborators (invitation cache, LLM client, mailer) live on
``app.state`` and are handed to routers through these functions, so tests
can swap them with ``app.dependency_overrides``::

    from app.api.deps import get_db, get_invitation_service
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.invitations.cache import InvitationCache
from app.invitations.llm import LLMClient
from app.invitations.repository import SQLAlchemyGuestRepository
from app.invitations.service import InvitationService
from app.mail.sender import InvitationMailer


def get_invitation_cache(request: Request) -> InvitationCache:
    return request.app.state.invitation_cache


def get_llm_client(request: Request) -> LLMClient | None:
    return request.app.state.llm_client


def get_mailer(request: Request) -> InvitationMailer:
    return request.app.state.mailer


def get_invitation_service(
    db: AsyncSession = Depends(get_db),
    cache: InvitationCache = Depends(get_invitation_cache),
    llm: LLMClient | None = Depends(get_llm_client),
) -> InvitationService:
    """Build a request-scoped orchestrator over the request's DB session."""
    return InvitationService(
        SQLAlchemyGuestRepository(db),
        cache,
        llm,
        min_length=settings.invitation_min_length,
        max_length=settings.invitation_max_length,
        max_attempts=settings.generation_max_attempts,
        base_delay=settings.generation_retry_base_delay,
        max_jitter=settings.generation_retry_max_jitter,
    )


__all__ = [
    "get_db",
    "get_invitation_cache",
    "get_invitation_service",
    "get_llm_client",
    "get_mailer",
]
