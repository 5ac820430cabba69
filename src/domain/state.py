"""
Document lifecycle state machine.

    draft --submit--> under-review --publish--> published
      ^                  |                         |
      +-----return-------+                         |
      +-----------------unpublish (admin)----------+

plus the draft -> draft edit-in-place row. Functions here never mutate their
inputs: they either return a new Document or raise.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from src.domain.assignments import AssignmentRegistry
from src.domain.entities import Actor, Document, DocumentStatus
from src.domain.errors import AuthorizationError, IllegalTransitionError, ValidationError
from src.domain.roles import Role, has_at_least, is_admin

DRAFT = DocumentStatus.DRAFT
UNDER_REVIEW = DocumentStatus.UNDER_REVIEW
PUBLISHED = DocumentStatus.PUBLISHED


def _require_author_editor(doc: Document, actor: Actor, allow_admin: bool) -> None:
    if allow_admin and is_admin(actor.role):
        return
    if not has_at_least(actor.role, Role.EDIT):
        raise AuthorizationError(
            f"Role 'edit' required, actor {actor.id!r} has {actor.role.value!r}",
            field="role",
        )
    if actor.id != doc.author_id:
        raise AuthorizationError(
            f"Actor {actor.id!r} is not the author of document {doc.id!r}",
            field="author_id",
        )


def _guard_submit(doc: Document, actor: Actor, registry: AssignmentRegistry) -> None:
    _require_author_editor(doc, actor, allow_admin=True)


def _guard_edit(doc: Document, actor: Actor, registry: AssignmentRegistry) -> None:
    _require_author_editor(doc, actor, allow_admin=False)


def _guard_review(doc: Document, actor: Actor, registry: AssignmentRegistry) -> None:
    if is_admin(actor.role):
        return
    if not has_at_least(actor.role, Role.PUBLISH):
        raise AuthorizationError(
            f"Role 'publish' required, actor {actor.id!r} has {actor.role.value!r}",
            field="role",
        )
    if not registry.is_assigned(doc.author_id, actor.id):
        raise AuthorizationError(
            f"Actor {actor.id!r} is not assigned to review documents by {doc.author_id!r}",
            field="assignment",
        )


def _guard_admin(doc: Document, actor: Actor, registry: AssignmentRegistry) -> None:
    if not is_admin(actor.role):
        raise AuthorizationError(
            f"Role 'admin' required, actor {actor.id!r} has {actor.role.value!r}",
            field="role",
        )


Guard = Callable[[Document, Actor, AssignmentRegistry], None]

TRANSITIONS: dict[tuple[DocumentStatus, DocumentStatus], Guard] = {
    (DRAFT, UNDER_REVIEW): _guard_submit,
    (UNDER_REVIEW, DRAFT): _guard_review,
    (UNDER_REVIEW, PUBLISHED): _guard_review,
    (PUBLISHED, DRAFT): _guard_admin,
    (DRAFT, DRAFT): _guard_edit,
}


def parse_status(value: DocumentStatus | str) -> DocumentStatus:
    if isinstance(value, DocumentStatus):
        return value
    try:
        return DocumentStatus(value)
    except ValueError as e:
        raise IllegalTransitionError(f"Unknown status: {value!r}", field="status") from e


def can_transition(current: DocumentStatus | str, new: DocumentStatus | str) -> bool:
    """Structural check only: is (current, new) a row of the table?"""
    try:
        return (parse_status(current), parse_status(new)) in TRANSITIONS
    except IllegalTransitionError:
        return False


def authorize(
    doc: Document,
    actor: Actor,
    target: DocumentStatus | str,
    registry: AssignmentRegistry,
) -> DocumentStatus:
    """
    Check that the actor may move doc to target.

    Returns:
        The parsed target status.

    Raises:
        IllegalTransitionError: If (doc.status, target) is not in the table.
        AuthorizationError: If the row's guard does not hold.
    """
    new = parse_status(target)
    guard = TRANSITIONS.get((doc.status, new))
    if guard is None:
        raise IllegalTransitionError(
            f"Invalid transition from {doc.status.value} to {new.value}",
            field="status",
        )
    guard(doc, actor, registry)
    return new


def allowed_targets(
    doc: Document, actor: Actor, registry: AssignmentRegistry
) -> list[DocumentStatus]:
    """Statuses the actor could move doc to right now, in table order."""
    allowed = []
    for (current, new), guard in TRANSITIONS.items():
        if current != doc.status:
            continue
        try:
            guard(doc, actor, registry)
        except AuthorizationError:
            continue
        allowed.append(new)
    return allowed


def transition(
    doc: Document,
    actor: Actor,
    target: DocumentStatus | str,
    registry: AssignmentRegistry,
    now: datetime,
    *,
    publisher_id: str | None = None,
    body: str | None = None,
    refresh_published_at: bool = False,
) -> Document:
    """
    Return a NEW Document moved to target.

    publisher_id is required when submitting for review; body is only used by
    the draft -> draft edit row. Raises before building anything, so a failed
    call leaves no trace.
    """
    new = authorize(doc, actor, target, registry)
    current = doc.status

    updates: dict[str, Any] = {
        "status": new,
        "updated_at": now,
        "version": doc.version + 1,
    }

    if (current, new) == (DRAFT, UNDER_REVIEW):
        if not publisher_id:
            raise ValidationError("A publisher must be chosen for review", field="publisher_id")
        if not is_admin(actor.role) and publisher_id not in registry.publishers_for(doc.author_id):
            raise ValidationError(
                f"Publisher {publisher_id!r} is not assigned to author {doc.author_id!r}",
                field="publisher_id",
            )
        updates["assigned_publisher_id"] = publisher_id

    elif new == DRAFT and current != DRAFT:
        # Returned from review or unpublished; published_at stays as history
        updates["assigned_publisher_id"] = None

    elif new == PUBLISHED:
        if doc.published_at is None or refresh_published_at:
            updates["published_at"] = now

    elif (current, new) == (DRAFT, DRAFT) and body is not None:
        updates["body"] = body

    return doc.model_copy(update=updates)


def edit_body(
    doc: Document,
    actor: Actor,
    body: str,
    registry: AssignmentRegistry,
    now: datetime,
) -> Document:
    """Edit-in-place: only the author (edit role or above) on a draft."""
    if doc.status != DRAFT:
        raise IllegalTransitionError(
            f"Document {doc.id!r} is not editable in status {doc.status.value}",
            field="status",
        )
    return transition(doc, actor, DRAFT, registry, now, body=body)
