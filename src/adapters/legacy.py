"""
Mapping from loosely typed legacy records to typed entities.

Legacy rows come in two shapes: content records (``authorId``/``body``) and
policy rows (``creator_id``/``policy_text``/``name``). Both are validated
here, in the persistence layer, so the engine only ever sees typed values.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from src.domain.entities import Actor, AssignmentRelation, Document, DocumentStatus
from src.domain.errors import ValidationError
from src.domain.roles import Role, parse_role

LEGACY_ROLE_ALIASES: dict[str, Role] = {
    "read-only": Role.READONLY,
    "super-admin": Role.ADMIN,
}

# "rejected" is a return to draft with a review note kept elsewhere
LEGACY_STATUS_ALIASES: dict[str, DocumentStatus] = {
    "rejected": DocumentStatus.DRAFT,
    "under_review": DocumentStatus.UNDER_REVIEW,
}


class _LegacyDocumentRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    body: str = Field(default="", validation_alias=AliasChoices("body", "policy_text"))
    status: str | None = None
    author_id: str = Field(validation_alias=AliasChoices("author_id", "authorId", "creator_id"))
    assigned_publisher_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "assigned_publisher_id", "assignedPublisherId", "publisher_id"
        ),
    )
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )
    published_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("published_at", "publishedAt")
    )
    version: int = 0


class _LegacyRelationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    editor_id: str = Field(validation_alias=AliasChoices("edit_user_id", "editUserId", "editor_id"))
    publisher_id: str = Field(
        validation_alias=AliasChoices("publish_user_id", "publishUserId", "publisher_id")
    )


def map_legacy_role(value: Any) -> Role:
    if isinstance(value, str) and value in LEGACY_ROLE_ALIASES:
        return LEGACY_ROLE_ALIASES[value]
    return parse_role(value)


def map_legacy_status(value: str | None) -> DocumentStatus:
    if value is None or value == "":
        return DocumentStatus.DRAFT
    if value in LEGACY_STATUS_ALIASES:
        return LEGACY_STATUS_ALIASES[value]
    try:
        return DocumentStatus(value)
    except ValueError as e:
        raise ValidationError(f"Unsupported legacy status: {value!r}", field="status") from e


def _validate(model: type[BaseModel], record: dict[str, Any]) -> Any:
    try:
        return model.model_validate(record)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid legacy record: {e}", field="record") from e


def document_from_record(record: dict[str, Any]) -> Document:
    """
    Build a Document from a legacy row.

    A published row without published_at takes its updated_at (or
    created_at) as the publication time.

    Raises:
        ValidationError: If required fields are missing, the status has no
            counterpart in the lifecycle, a review has no publisher, or a
            published row has no timestamp at all.
    """
    raw: _LegacyDocumentRecord = _validate(_LegacyDocumentRecord, record)
    status = map_legacy_status(raw.status)

    fields: dict[str, Any] = {
        "id": raw.id,
        "title": raw.title,
        "body": raw.body,
        "status": status,
        "author_id": raw.author_id,
        "assigned_publisher_id": raw.assigned_publisher_id,
        "published_at": raw.published_at,
        "version": raw.version,
    }
    if raw.created_at is not None:
        fields["created_at"] = raw.created_at
    if raw.updated_at is not None:
        fields["updated_at"] = raw.updated_at

    # Drafts carry no reviewer; a stale publisher_id on a draft is dropped
    if status == DocumentStatus.DRAFT:
        fields["assigned_publisher_id"] = None

    if status == DocumentStatus.UNDER_REVIEW and not raw.assigned_publisher_id:
        raise ValidationError(
            f"Legacy record {raw.id!r} is under review without a publisher",
            field="assigned_publisher_id",
        )

    # Old rows never stamped published_at; the last write is the best guess
    if status == DocumentStatus.PUBLISHED and raw.published_at is None:
        stamp = raw.updated_at or raw.created_at
        if stamp is None:
            raise ValidationError(
                f"Legacy record {raw.id!r} is published without any timestamp",
                field="published_at",
            )
        fields["published_at"] = stamp

    return Document(**fields)


def actor_from_record(record: dict[str, Any]) -> Actor:
    if "id" not in record:
        raise ValidationError("Actor record has no id", field="id")
    return Actor(
        id=str(record["id"]),
        role=map_legacy_role(record.get("role")),
        name=record.get("name"),
        email=record.get("email"),
    )


def relations_from_records(records: Iterable[dict[str, Any]]) -> set[AssignmentRelation]:
    relations = set()
    for record in records:
        raw: _LegacyRelationRecord = _validate(_LegacyRelationRecord, record)
        relations.add(AssignmentRelation.create(raw.editor_id, raw.publisher_id))
    return relations
