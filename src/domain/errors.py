"""
Typed failures raised by the lifecycle engine.

Every guard failure surfaces as one of these. Components map ``code`` onto
their output error lists; nothing here is fatal to the process.
"""


class LifecycleError(Exception):
    """Base class for all engine failures."""

    code = "LIFECYCLE_ERROR"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class AuthorizationError(LifecycleError):
    """Actor lacks the required role or assignment relation."""

    code = "PERMISSION_DENIED"


class IllegalTransitionError(LifecycleError):
    """Requested status change is not in the transition table."""

    code = "ILLEGAL_TRANSITION"


class ValidationError(LifecycleError):
    """Structurally invalid input."""

    code = "VALIDATION_ERROR"


class InvalidAssignmentError(ValidationError):
    code = "INVALID_ASSIGNMENT"


class DocumentNotFoundError(LifecycleError):
    code = "DOCUMENT_NOT_FOUND"


class ConcurrencyConflictError(LifecycleError):
    """Stored document moved on since it was loaded (stale version)."""

    code = "CONFLICT"


class PersistenceError(LifecycleError):
    """A write could not be completed; the document was left as it was."""

    code = "PERSISTENCE_ERROR"
