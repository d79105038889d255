"""AI-backed invitation generation with caching, retry and template fallback."""

from app.invitations.cache import InvitationCache
from app.invitations.llm import LiteLLMClient, LLMClient, build_llm_client
from app.invitations.repository import GuestRepository, SQLAlchemyGuestRepository
from app.invitations.service import (
    FeedbackStatus,
    GenerationResult,
    InvitationService,
    InvitationSource,
    RevisionResult,
)

__all__ = [
    "FeedbackStatus",
    "GenerationResult",
    "GuestRepository",
    "InvitationCache",
    "InvitationService",
    "InvitationSource",
    "LLMClient",
    "LiteLLMClient",
    "RevisionResult",
    "SQLAlchemyGuestRepository",
    "build_llm_client",
]
