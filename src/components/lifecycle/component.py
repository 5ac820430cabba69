"""Lifecycle component - drives documents through draft, review and publication."""

import logging
from datetime import datetime

from src.components.lifecycle.models import (
    AllowedTransitionsInput,
    AllowedTransitionsOutput,
    EditBodyInput,
    LifecycleValidationError,
    PublishInput,
    ReturnToDraftInput,
    SubmitForReviewInput,
    TransitionInput,
    TransitionOutput,
    UnpublishInput,
)
from src.components.lifecycle.ports import (
    AssignmentStorePort,
    ClockPort,
    DocumentRepoPort,
    NotifierPort,
    RevisionRepoPort,
)
from src.domain.assignments import AssignmentRegistry
from src.domain.entities import (
    Actor,
    Document,
    DocumentStatus,
    EventType,
    LifecycleEvent,
    RevisionSource,
)
from src.domain.errors import IllegalTransitionError, LifecycleError, PersistenceError
from src.domain.locks import DocumentLocks
from src.domain.revisions import build_revision
from src.domain.state import allowed_targets, edit_body, transition
from src.rules.models import LifecycleRules, NotificationRules

logger = logging.getLogger(__name__)

LifecycleInput = (
    TransitionInput
    | SubmitForReviewInput
    | ReturnToDraftInput
    | PublishInput
    | UnpublishInput
    | EditBodyInput
    | AllowedTransitionsInput
)
LifecycleOutput = TransitionOutput | AllowedTransitionsOutput

DRAFT = DocumentStatus.DRAFT
UNDER_REVIEW = DocumentStatus.UNDER_REVIEW
PUBLISHED = DocumentStatus.PUBLISHED

# (from, to) -> (event type, title template); draft -> draft sends nothing
_EVENTS: dict[tuple[DocumentStatus, DocumentStatus], tuple[EventType, str]] = {
    (DRAFT, UNDER_REVIEW): ("policy_assignment", "Policy submitted for review: {title}"),
    (UNDER_REVIEW, DRAFT): ("policy_returned", "Policy returned for changes: {title}"),
    (UNDER_REVIEW, PUBLISHED): ("policy_published", "Policy published: {title}"),
    (PUBLISHED, DRAFT): ("policy_status_change", "Policy moved back to draft: {title}"),
}


def to_error(exc: LifecycleError) -> LifecycleValidationError:
    return LifecycleValidationError(code=exc.code, message=exc.message, field=exc.field)


def commit_edit(
    documents: DocumentRepoPort,
    revisions: RevisionRepoPort | None,
    before: Document,
    after: Document,
    actor_id: str,
    source: RevisionSource,
    now: datetime,
) -> None:
    """
    Save an edited document together with its revision.

    When the revision cannot be stored, the previous content is written back
    at the next version and PersistenceError is raised, so callers see
    either both writes or neither. Callers hold the document lock.

    Raises:
        ConcurrencyConflictError: If the document save itself is stale.
        PersistenceError: If the revision failed and the document was restored.
    """
    documents.save_document(after)
    if revisions is None or before.body == after.body:
        return

    try:
        revisions.save(
            build_revision(
                after.id,
                revisions.next_revision_no(after.id),
                before.body,
                after.body,
                actor_id,
                source,
                now,
            )
        )
    except Exception as e:
        logger.exception("Revision for %s failed; restoring previous content", after.id)
        documents.save_document(before.model_copy(update={"version": after.version + 1}))
        raise PersistenceError(
            f"Revision for document {after.id!r} could not be stored: {e}",
            field="revision",
        ) from e


class LifecycleComponent:
    """Component for status transitions and direct body edits."""

    def __init__(
        self,
        document_repo: DocumentRepoPort,
        assignment_store: AssignmentStorePort,
        clock: ClockPort,
        notifier: NotifierPort | None = None,
        revision_repo: RevisionRepoPort | None = None,
        rules: LifecycleRules | None = None,
        notification_rules: NotificationRules | None = None,
        locks: DocumentLocks | None = None,
    ) -> None:
        self._documents = document_repo
        self._assignments = assignment_store
        self._clock = clock
        self._notifier = notifier
        self._revisions = revision_repo
        self._rules = rules or LifecycleRules()
        self._notification_rules = notification_rules or NotificationRules()
        self._locks = locks or DocumentLocks()

    def run(self, input_data: LifecycleInput) -> LifecycleOutput:
        """Main dispatcher - routes to appropriate handler based on input type."""
        if isinstance(input_data, TransitionInput):
            return self.run_transition(input_data)
        elif isinstance(input_data, SubmitForReviewInput):
            return self.run_submit_for_review(input_data)
        elif isinstance(input_data, ReturnToDraftInput):
            return self.run_return_to_draft(input_data)
        elif isinstance(input_data, PublishInput):
            return self.run_publish(input_data)
        elif isinstance(input_data, UnpublishInput):
            return self.run_unpublish(input_data)
        elif isinstance(input_data, EditBodyInput):
            return self.run_edit(input_data)
        elif isinstance(input_data, AllowedTransitionsInput):
            return self.run_allowed(input_data)
        else:
            raise ValueError(f"Unknown input type: {type(input_data)}")

    def _registry(self) -> AssignmentRegistry:
        return AssignmentRegistry(self._assignments.load_assignments())

    def run_transition(self, input_data: TransitionInput) -> TransitionOutput:
        """Apply one row of the transition table, all or nothing."""
        with self._locks.hold(input_data.document_id):
            try:
                before = self._documents.load_document(input_data.document_id)
                expected = input_data.expected_status
                if expected is not None and before.status != expected:
                    raise IllegalTransitionError(
                        f"Document {before.id!r} is {before.status.value}, not {expected.value}",
                        field="status",
                    )
                after = transition(
                    before,
                    input_data.actor,
                    input_data.target,
                    self._registry(),
                    self._clock.now(),
                    publisher_id=input_data.publisher_id,
                    refresh_published_at=self._rules.refresh_published_at,
                )
                self._documents.save_document(after)
            except LifecycleError as e:
                logger.warning(
                    "Transition of %s to %s by %s denied: %s %s",
                    input_data.document_id,
                    input_data.target,
                    input_data.actor.id,
                    e.code,
                    e.message,
                )
                return TransitionOutput(document=None, errors=[to_error(e)], success=False)

        logger.info(
            "Document %s moved %s -> %s by %s",
            after.id,
            before.status.value,
            after.status.value,
            input_data.actor.id,
        )
        self._notify(before, after, input_data.actor, input_data.note)
        return TransitionOutput(document=after)

    def run_submit_for_review(self, input_data: SubmitForReviewInput) -> TransitionOutput:
        return self.run_transition(
            TransitionInput(
                actor=input_data.actor,
                document_id=input_data.document_id,
                target=UNDER_REVIEW,
                publisher_id=input_data.publisher_id,
                expected_status=DRAFT,
            )
        )

    def run_return_to_draft(self, input_data: ReturnToDraftInput) -> TransitionOutput:
        return self.run_transition(
            TransitionInput(
                actor=input_data.actor,
                document_id=input_data.document_id,
                target=DRAFT,
                note=input_data.note,
                expected_status=UNDER_REVIEW,
            )
        )

    def run_publish(self, input_data: PublishInput) -> TransitionOutput:
        return self.run_transition(
            TransitionInput(
                actor=input_data.actor,
                document_id=input_data.document_id,
                target=PUBLISHED,
                expected_status=UNDER_REVIEW,
            )
        )

    def run_unpublish(self, input_data: UnpublishInput) -> TransitionOutput:
        return self.run_transition(
            TransitionInput(
                actor=input_data.actor,
                document_id=input_data.document_id,
                target=DRAFT,
                expected_status=PUBLISHED,
            )
        )

    def run_edit(self, input_data: EditBodyInput) -> TransitionOutput:
        """Edit a draft's body in place and record a revision."""
        with self._locks.hold(input_data.document_id):
            try:
                before = self._documents.load_document(input_data.document_id)
                now = self._clock.now()
                after = edit_body(before, input_data.actor, input_data.body, self._registry(), now)
                commit_edit(
                    self._documents,
                    self._revisions,
                    before,
                    after,
                    input_data.actor.id,
                    "edit",
                    now,
                )
            except LifecycleError as e:
                logger.warning(
                    "Edit of %s by %s denied: %s", input_data.document_id, input_data.actor.id, e.code
                )
                return TransitionOutput(document=None, errors=[to_error(e)], success=False)

        logger.info("Document %s edited by %s", after.id, input_data.actor.id)
        return TransitionOutput(document=after)

    def run_allowed(self, input_data: AllowedTransitionsInput) -> AllowedTransitionsOutput:
        """List the statuses the actor may move the document to."""
        try:
            doc = self._documents.load_document(input_data.document_id)
        except LifecycleError as e:
            return AllowedTransitionsOutput(targets=[], errors=[to_error(e)], success=False)
        return AllowedTransitionsOutput(
            targets=allowed_targets(doc, input_data.actor, self._registry())
        )

    def _notify(self, before: Document, after: Document, actor: Actor, note: str | None) -> None:
        if self._notifier is None or not self._notification_rules.enabled:
            return
        entry = _EVENTS.get((before.status, after.status))
        if entry is None:
            return
        event_type, title = entry
        if event_type == "policy_assignment":
            recipient = after.assigned_publisher_id
        else:
            recipient = after.author_id
        if recipient is None or recipient == actor.id:
            return

        metadata = {"note": note} if note else {}
        self._notifier.notify(
            LifecycleEvent(
                event_type=event_type,
                document_id=after.id,
                actor_id=actor.id,
                recipient_id=recipient,
                from_status=before.status,
                to_status=after.status,
                title=title.format(title=after.title),
                created_at=after.updated_at,
                metadata=metadata,
            )
        )
