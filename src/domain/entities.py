from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from src.domain.errors import InvalidAssignmentError
from src.domain.roles import Role


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- Enums / Literals ---


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    UNDER_REVIEW = "under-review"
    PUBLISHED = "published"


SuggestionOrigin = Literal["ai", "tracked-change"]
RevisionSource = Literal["edit", "suggestion"]
ChangeType = Literal["addition", "deletion", "modification"]
EventType = Literal[
    "policy_status_change",
    "policy_assignment",
    "policy_published",
    "policy_returned",
]

# --- Actors & Assignments ---


class Actor(BaseModel):
    """Trusted identity for the current session. Never authenticated here."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    name: str | None = None
    email: str | None = None


class AssignmentRelation(BaseModel):
    model_config = ConfigDict(frozen=True)

    editor_id: str
    publisher_id: str

    @classmethod
    def create(cls, editor_id: str, publisher_id: str) -> "AssignmentRelation":
        """Build a relation, rejecting self-assignment."""
        if editor_id == publisher_id:
            raise InvalidAssignmentError(
                f"Actor {editor_id!r} cannot be assigned as their own publisher",
                field="publisher_id",
            )
        return cls(editor_id=editor_id, publisher_id=publisher_id)


# --- Documents ---


class Document(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    body: str = ""
    status: DocumentStatus = DocumentStatus.DRAFT

    author_id: str
    assigned_publisher_id: str | None = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    published_at: datetime | None = None

    # Optimistic-concurrency token, bumped by every engine mutation
    version: int = 0


class Revision(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    document_id: str
    revision_no: int
    field_name: str = "body"
    original_content: str
    modified_content: str
    change_type: ChangeType
    source: RevisionSource
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)


# --- Suggestions ---


class Suggestion(BaseModel):
    """Proposed replacement text awaiting accept or reject."""

    model_config = ConfigDict(frozen=True)

    original_text: str
    suggested_text: str
    operation_type: str
    operation_description: str = ""
    origin: SuggestionOrigin = "ai"
    change_id: str | None = None
    author_initials: str | None = None


# --- Notifications ---


class LifecycleEvent(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: EventType
    document_id: str
    actor_id: str
    recipient_id: str
    from_status: DocumentStatus
    to_status: DocumentStatus
    title: str
    created_at: datetime = Field(default_factory=utc_now)
    metadata: dict[str, Any] = Field(default_factory=dict)
