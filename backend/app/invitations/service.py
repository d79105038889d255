"""Invitation generation orchestrator.

Sequences cache → stored text → LLM (with retry) → template fallback →
persistence → cache for one guest. Every request runs start to finish; only
validation, not-found and data-integrity problems are raised to the caller.
Provider outages and storage hiccups degrade to template text or a
``persistence_failed`` warning instead.
"""

import asyncio
import enum
import logging
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from app.invitations.cache import InvitationCache, cache_key
from app.invitations.errors import (
    DataIntegrityError,
    NotFoundError,
    StatusTransitionError,
    ValidationError,
)
from app.invitations.llm import LLMClient
from app.invitations.prompts import (
    build_feedback_prompt,
    build_feedback_system_prompt,
    build_invitation_prompt,
    build_system_prompt,
    enforce_length_ceiling,
)
from app.invitations.repository import GuestRepository
from app.invitations.retry import execute_with_retry
from app.invitations.templates import build_template_invitation
from app.models.guest import Guest, GuestStatus

logger = logging.getLogger(__name__)

PERSISTENCE_FAILED = "persistence_failed"
EDITABLE_STATUSES = {GuestStatus.GENERATED.value, GuestStatus.EDITED.value}


class InvitationSource(str, enum.Enum):
    """Where the returned invitation text came from."""

    CACHE = "cache"
    DATABASE = "database"
    NEWLY_GENERATED = "newly_generated"


class FeedbackStatus(str, enum.Enum):
    """Outcome of the feedback step of a revision."""

    NOT_REQUESTED = "not_requested"  # no feedback text given
    UNAVAILABLE = "unavailable"  # feedback given but no LLM configured
    APPLIED = "applied"
    FAILED = "failed"  # LLM attempted and failed; caller's content kept


@dataclass
class GenerationResult:
    text: str
    source: InvitationSource
    generator: str | None = None  # "llm" or "template" for newly generated text
    warning: str | None = None


@dataclass
class RevisionResult:
    text: str
    guest: Guest | None  # None when the edit could not be saved
    feedback_status: FeedbackStatus
    warning: str | None = None


def parse_guest_id(guest_id: uuid.UUID | str) -> uuid.UUID:
    """Parse a guest id, raising ``ValidationError`` when malformed."""
    if isinstance(guest_id, uuid.UUID):
        return guest_id
    try:
        return uuid.UUID(str(guest_id).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid guest id: {guest_id!r}") from exc


def _trace_id() -> str:
    return uuid.uuid4().hex[:8]


class InvitationService:
    """Generates, revises and caches invitation text for guests.

    Collaborators are injected so the service can run against fakes:
    ``repository`` for guest storage, ``cache`` for short-term memoization
    and ``llm`` (None when no provider is configured).
    """

    def __init__(
        self,
        repository: GuestRepository,
        cache: InvitationCache,
        llm: LLMClient | None,
        *,
        min_length: int = 300,
        max_length: int = 400,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_jitter: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.repository = repository
        self.cache = cache
        self.llm = llm
        self.min_length = min_length
        self.max_length = max_length
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_jitter = max_jitter
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(self, guest_id: uuid.UUID | str, force: bool = False) -> GenerationResult:
        """Return invitation text for a guest, generating it when needed.

        Raises:
            ValidationError: malformed guest id.
            StatusTransitionError: ``force`` on a guest whose invitation was sent.
            NotFoundError: no such guest.
            DataIntegrityError: the guest's couple profile is missing.
        """
        gid = parse_guest_id(guest_id)
        key = cache_key(gid)
        trace = _trace_id()
        logger.info("[%s] Generating invitation for guest %s (force=%s)", trace, gid, force)

        if not force:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("[%s] Cache hit for guest %s", trace, gid)
                return GenerationResult(text=cached, source=InvitationSource.CACHE)

        guest = await self._load_guest(gid, trace)
        if force and guest.status == GuestStatus.SENT.value:
            raise StatusTransitionError("Cannot regenerate an invitation that has already been sent")

        if not force and guest.invitation_content:
            logger.info("[%s] Guest %s already has an invitation (%s)", trace, gid, guest.status)
            self.cache.set(key, guest.invitation_content)
            return GenerationResult(text=guest.invitation_content, source=InvitationSource.DATABASE)

        text, generator = await self._compose(guest, trace)

        warning = None
        try:
            await self.repository.update(
                gid, invitation_content=text, status=GuestStatus.GENERATED.value
            )
        except Exception as exc:
            logger.error(
                "[%s] Invitation for guest %s generated but not saved: %s", trace, gid, exc
            )
            warning = PERSISTENCE_FAILED

        self.cache.set(key, text)
        logger.info(
            "[%s] Invitation ready for guest %s (generator=%s, length=%d)",
            trace,
            gid,
            generator,
            len(text),
        )
        return GenerationResult(
            text=text,
            source=InvitationSource.NEWLY_GENERATED,
            generator=generator,
            warning=warning,
        )

    async def _compose(self, guest: Guest, trace: str) -> tuple[str, str]:
        """Produce new text via the LLM, or the template when that fails."""
        couple = guest.couple
        if self.llm is None:
            logger.info("[%s] No LLM configured, using template", trace)
        else:
            try:
                system_prompt = build_system_prompt(self.min_length, self.max_length)
                user_prompt = build_invitation_prompt(
                    guest, couple, self.min_length, self.max_length
                )
                text = await self._complete_with_retry(system_prompt, user_prompt)
                return self._fit(text, couple, trace), "llm"
            except Exception as exc:
                logger.warning(
                    "[%s] LLM generation failed for guest %s, using template: %s",
                    trace,
                    guest.id,
                    exc,
                )
        return build_template_invitation(guest, couple), "template"

    # ------------------------------------------------------------------
    # Revision
    # ------------------------------------------------------------------

    async def revise(
        self,
        guest_id: uuid.UUID | str,
        invitation_content: str,
        feedback: str | None = None,
    ) -> RevisionResult:
        """Save an edited invitation, optionally rewritten from feedback.

        When the feedback rewrite fails the caller's ``invitation_content`` is
        kept; ``feedback_status`` tells the caller which case occurred.

        Raises:
            ValidationError: malformed id or empty content.
            StatusTransitionError: the guest is not in an editable status.
            NotFoundError: no such guest.
            DataIntegrityError: the guest's couple profile is missing.
        """
        gid = parse_guest_id(guest_id)
        if not invitation_content or not invitation_content.strip():
            raise ValidationError("Invitation content must not be empty")
        trace = _trace_id()

        guest = await self._load_guest(gid, trace)
        if guest.status not in EDITABLE_STATUSES:
            raise StatusTransitionError(
                f"Cannot edit the invitation of a guest with status '{guest.status}'"
            )

        text = invitation_content.strip()
        feedback = (feedback or "").strip()
        if not feedback:
            feedback_status = FeedbackStatus.NOT_REQUESTED
        elif self.llm is None:
            logger.info("[%s] Feedback given but no LLM configured; keeping edit", trace)
            feedback_status = FeedbackStatus.UNAVAILABLE
        else:
            try:
                system_prompt = build_feedback_system_prompt(self.min_length, self.max_length)
                user_prompt = build_feedback_prompt(
                    guest, text, feedback, self.min_length, self.max_length
                )
                rewritten = await self._complete_with_retry(system_prompt, user_prompt)
                text = self._fit(rewritten, guest.couple, trace)
                feedback_status = FeedbackStatus.APPLIED
            except Exception as exc:
                logger.error(
                    "[%s] Feedback rewrite failed for guest %s, keeping edit: %s",
                    trace,
                    gid,
                    exc,
                )
                feedback_status = FeedbackStatus.FAILED

        warning = None
        saved: Guest | None = None
        try:
            saved = await self.repository.update(
                gid, invitation_content=text, status=GuestStatus.EDITED.value
            )
        except Exception as exc:
            logger.error("[%s] Edited invitation for guest %s not saved: %s", trace, gid, exc)
            warning = PERSISTENCE_FAILED

        self.cache.set(cache_key(gid), text)
        logger.info("[%s] Invitation updated for guest %s (feedback=%s)", trace, gid, feedback_status.value)
        return RevisionResult(
            text=text, guest=saved, feedback_status=feedback_status, warning=warning
        )

    def forget(self, guest_id: uuid.UUID | str) -> None:
        """Drop a guest's cached invitation."""
        self.cache.invalidate(cache_key(parse_guest_id(guest_id)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load_guest(self, gid: uuid.UUID, trace: str) -> Guest:
        guest = await self.repository.find(gid)
        if guest is None:
            logger.warning("[%s] Guest %s not found", trace, gid)
            raise NotFoundError(f"Guest {gid} not found")
        if guest.couple is None:
            logger.error(
                "[%s] Guest %s references missing couple profile %s",
                trace,
                gid,
                guest.couple_id,
            )
            raise DataIntegrityError(
                f"Guest {gid} references missing couple profile {guest.couple_id}"
            )
        return guest

    async def _complete_with_retry(self, system_prompt: str, user_prompt: str) -> str:
        return await execute_with_retry(
            lambda: self.llm.complete(system_prompt, user_prompt),
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
            max_jitter=self.max_jitter,
            sleep=self._sleep,
        )

    def _fit(self, text: str, couple, trace: str) -> str:
        fitted = enforce_length_ceiling(text, couple, self.max_length)
        if len(fitted) < len(text.strip()):
            logger.warning(
                "[%s] Invitation of %d characters truncated to %d",
                trace,
                len(text.strip()),
                len(fitted),
            )
        elif len(fitted) < self.min_length:
            logger.warning(
                "[%s] Invitation shorter than requested (%d < %d)",
                trace,
                len(fitted),
                self.min_length,
            )
        return fitted
