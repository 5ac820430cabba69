"""
Suggestions component input/output models.
"""

from dataclasses import dataclass, field
from uuid import uuid4

from src.components.lifecycle.models import LifecycleValidationError
from src.domain.entities import Actor, Document, Suggestion
from src.domain.suggestions import SuggestionQueue


@dataclass
class EditingSession:
    """One open editor on one document; owns at most one live suggestion."""

    document_id: str
    session_id: str = field(default_factory=lambda: str(uuid4()))
    queue: SuggestionQueue = field(default_factory=SuggestionQueue)


# --- Input Models ---


@dataclass(frozen=True)
class ProposeInput:
    session: EditingSession
    suggestion: Suggestion


@dataclass(frozen=True)
class PreviewInput:
    session: EditingSession


@dataclass(frozen=True)
class DismissInput:
    session: EditingSession


@dataclass(frozen=True)
class AcceptInput:
    actor: Actor
    session: EditingSession


# --- Output Models ---


@dataclass(frozen=True)
class SuggestionOutput:
    """State of the session's queue after the operation."""

    suggestion: Suggestion | None
    visible: bool
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PreviewOutput:
    """Body the document would get if the live suggestion were accepted."""

    markup: str | None
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class AcceptOutput:
    document: Document | None
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True
