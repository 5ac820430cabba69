"""Lifecycle component models - frozen dataclass inputs and outputs."""

from dataclasses import dataclass, field

from src.domain.entities import Actor, Document, DocumentStatus


@dataclass(frozen=True)
class LifecycleValidationError:
    """Error details for lifecycle operations."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class TransitionInput:
    """Move a document to any status named by the caller."""

    actor: Actor
    document_id: str
    target: DocumentStatus | str
    publisher_id: str | None = None
    note: str | None = None
    # Reject the request if the document is not currently in this status
    expected_status: DocumentStatus | None = None


@dataclass(frozen=True)
class SubmitForReviewInput:
    actor: Actor
    document_id: str
    publisher_id: str


@dataclass(frozen=True)
class ReturnToDraftInput:
    """Send a document under review back to its author."""

    actor: Actor
    document_id: str
    note: str | None = None


@dataclass(frozen=True)
class PublishInput:
    actor: Actor
    document_id: str


@dataclass(frozen=True)
class UnpublishInput:
    actor: Actor
    document_id: str


@dataclass(frozen=True)
class EditBodyInput:
    actor: Actor
    document_id: str
    body: str


@dataclass(frozen=True)
class AllowedTransitionsInput:
    actor: Actor
    document_id: str


@dataclass(frozen=True)
class TransitionOutput:
    document: Document | None
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class AllowedTransitionsOutput:
    targets: list[DocumentStatus]
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True
