from __future__ import annotations

import logging
from dataclasses import dataclass

from src.adapters.clock import SystemClock
from src.adapters.identity import create_actor_provider
from src.adapters.memory import InMemoryAssignmentStore, InMemoryDocumentRepo, InMemoryRevisionRepo
from src.adapters.notify import InMemoryNotifier, LoggingNotifier
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteAssignmentStore, SQLiteDocumentRepo, SQLiteRevisionRepo
from src.components.assignments import AssignInput, AssignmentComponent, AssignmentOutput, UnassignInput
from src.components.lifecycle import (
    EditBodyInput,
    LifecycleComponent,
    PublishInput,
    ReturnToDraftInput,
    SubmitForReviewInput,
    TransitionOutput,
    UnpublishInput,
)
from src.components.suggestions import (
    AcceptInput,
    AcceptOutput,
    EditingSession,
    ProposeInput,
    SuggestionComponent,
    SuggestionOutput,
)
from src.domain.entities import Actor, Suggestion
from src.domain.locks import DocumentLocks
from src.ports.clock import ClockPort
from src.ports.identity import ActorProviderPort
from src.ports.notify import NotifierPort
from src.ports.repo import AssignmentStorePort, DocumentRepoPort, RevisionRepoPort
from src.rules.models import Rules

logger = logging.getLogger(__name__)


@dataclass
class LifecycleContext:
    """
    Wires one session's components to shared adapters.

    Every convenience method asks the actor provider for the current actor,
    so callers never pass identities around themselves.
    """

    lifecycle: LifecycleComponent
    assignments: AssignmentComponent
    suggestions: SuggestionComponent
    document_repo: DocumentRepoPort
    assignment_store: AssignmentStorePort
    revision_repo: RevisionRepoPort
    notifier: NotifierPort
    actors: ActorProviderPort
    rules: Rules
    clock: ClockPort

    @classmethod
    def _wire(
        cls,
        rules: Rules,
        document_repo: DocumentRepoPort,
        assignment_store: AssignmentStorePort,
        revision_repo: RevisionRepoPort,
        notifier: NotifierPort,
        clock: ClockPort,
        session_actor: Actor | None,
    ) -> LifecycleContext:
        locks = DocumentLocks()
        lifecycle = LifecycleComponent(
            document_repo,
            assignment_store,
            clock,
            notifier=notifier,
            revision_repo=revision_repo,
            rules=rules.lifecycle,
            notification_rules=rules.notifications,
            locks=locks,
        )
        suggestions = SuggestionComponent(
            document_repo,
            assignment_store,
            clock,
            revision_repo=revision_repo,
            rules=rules.suggestions,
            locks=locks,
        )
        return cls(
            lifecycle=lifecycle,
            assignments=AssignmentComponent(assignment_store),
            suggestions=suggestions,
            document_repo=document_repo,
            assignment_store=assignment_store,
            revision_repo=revision_repo,
            notifier=notifier,
            actors=create_actor_provider(rules.identity, session_actor),
            rules=rules,
            clock=clock,
        )

    @classmethod
    def create(
        cls, db_path: str, rules: Rules, session_actor: Actor | None = None
    ) -> LifecycleContext:
        """SQLite-backed context; applies pending migrations first."""
        SQLiteMigrator(db_path).run_migrations()
        return cls._wire(
            rules,
            SQLiteDocumentRepo(db_path),
            SQLiteAssignmentStore(db_path),
            SQLiteRevisionRepo(db_path),
            LoggingNotifier(),
            SystemClock(),
            session_actor,
        )

    @classmethod
    def in_memory(
        cls,
        rules: Rules,
        session_actor: Actor | None = None,
        clock: ClockPort | None = None,
    ) -> LifecycleContext:
        return cls._wire(
            rules,
            InMemoryDocumentRepo(),
            InMemoryAssignmentStore(),
            InMemoryRevisionRepo(),
            InMemoryNotifier(),
            clock or SystemClock(),
            session_actor,
        )

    # --- Convenience entry points for the current actor ---

    def submit_for_review(self, document_id: str, publisher_id: str) -> TransitionOutput:
        actor = self.actors.current_actor()
        return self.lifecycle.run_submit_for_review(
            SubmitForReviewInput(actor=actor, document_id=document_id, publisher_id=publisher_id)
        )

    def return_to_draft(self, document_id: str, note: str | None = None) -> TransitionOutput:
        actor = self.actors.current_actor()
        return self.lifecycle.run_return_to_draft(
            ReturnToDraftInput(actor=actor, document_id=document_id, note=note)
        )

    def publish(self, document_id: str) -> TransitionOutput:
        actor = self.actors.current_actor()
        return self.lifecycle.run_publish(PublishInput(actor=actor, document_id=document_id))

    def unpublish(self, document_id: str) -> TransitionOutput:
        actor = self.actors.current_actor()
        return self.lifecycle.run_unpublish(UnpublishInput(actor=actor, document_id=document_id))

    def edit(self, document_id: str, body: str) -> TransitionOutput:
        actor = self.actors.current_actor()
        return self.lifecycle.run_edit(
            EditBodyInput(actor=actor, document_id=document_id, body=body)
        )

    def assign(self, editor_id: str, publisher_id: str) -> AssignmentOutput:
        actor = self.actors.current_actor()
        return self.assignments.run_assign(
            AssignInput(actor=actor, editor_id=editor_id, publisher_id=publisher_id)
        )

    def unassign(self, editor_id: str, publisher_id: str) -> AssignmentOutput:
        actor = self.actors.current_actor()
        return self.assignments.run_unassign(
            UnassignInput(actor=actor, editor_id=editor_id, publisher_id=publisher_id)
        )

    def open_session(self, document_id: str) -> EditingSession:
        return self.suggestions.open_session(document_id)

    def propose(self, session: EditingSession, suggestion: Suggestion) -> SuggestionOutput:
        return self.suggestions.run_propose(ProposeInput(session=session, suggestion=suggestion))

    def accept(self, session: EditingSession) -> AcceptOutput:
        actor = self.actors.current_actor()
        return self.suggestions.run_accept(AcceptInput(actor=actor, session=session))
