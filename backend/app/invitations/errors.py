"""Error taxonomy for invitation generation.

Only ``ValidationError``, ``NotFoundError`` and ``DataIntegrityError`` leave
the orchestrator. ``GenerationTransientError`` is absorbed by the template
fallback and ``PersistenceError`` becomes a warning on the result.
"""


class InvitationError(Exception):
    """Base class for invitation subsystem errors."""


class ValidationError(InvitationError):
    """Bad caller input. Never retried."""


class StatusTransitionError(ValidationError):
    """The guest's lifecycle status does not allow the requested change."""


class NotFoundError(InvitationError):
    """No guest exists with the requested id."""


class DataIntegrityError(InvitationError):
    """A guest references a couple profile that does not exist.

    Distinct from ``NotFoundError``: the guest is there, its relationship is
    corrupt, and operators should treat it as a bug rather than a 404.
    """


class GenerationTransientError(InvitationError):
    """The LLM call failed (network, rate limit, malformed or empty response)."""


class PersistenceError(InvitationError):
    """Writing the guest record failed."""
