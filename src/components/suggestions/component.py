"""
Suggestions component - propose, preview, accept or dismiss proposed edits.

Suggestions (AI output or a human's tracked change) are held in the editing
session until accepted. Accepting merges through the configured strategy and
then applies the same edit-in-place guard as a direct edit; dismissing never
touches the document.
"""

import logging

from src.components.lifecycle.component import commit_edit, to_error
from src.components.lifecycle.models import LifecycleValidationError
from src.domain.assignments import AssignmentRegistry
from src.domain.errors import LifecycleError
from src.domain.locks import DocumentLocks
from src.domain.merge import WholeDocumentMerge
from src.domain.state import edit_body
from src.rules.models import SuggestionRules

from .models import (
    AcceptInput,
    AcceptOutput,
    DismissInput,
    EditingSession,
    PreviewInput,
    PreviewOutput,
    ProposeInput,
    SuggestionOutput,
)
from .ports import (
    AssignmentStorePort,
    ClockPort,
    DocumentRepoPort,
    MergeStrategy,
    RevisionRepoPort,
)

logger = logging.getLogger(__name__)

NO_SUGGESTION = LifecycleValidationError(
    code="NO_SUGGESTION", message="No suggestion is pending", field="suggestion"
)


def _state(session: EditingSession) -> SuggestionOutput:
    return SuggestionOutput(suggestion=session.queue.peek(), visible=session.queue.visible)


class SuggestionComponent:
    def __init__(
        self,
        document_repo: DocumentRepoPort,
        assignment_store: AssignmentStorePort,
        clock: ClockPort,
        revision_repo: RevisionRepoPort | None = None,
        strategy: MergeStrategy | None = None,
        rules: SuggestionRules | None = None,
        locks: DocumentLocks | None = None,
    ) -> None:
        self._documents = document_repo
        self._assignments = assignment_store
        self._clock = clock
        self._revisions = revision_repo
        self._rules = rules or SuggestionRules()
        self._strategy = strategy or WholeDocumentMerge(escape_html=self._rules.escape_html)
        self._locks = locks or DocumentLocks()

    def open_session(self, document_id: str) -> EditingSession:
        """
        Start an editing session on an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        self._documents.load_document(document_id)
        return EditingSession(document_id=document_id)

    def run_propose(self, inp: ProposeInput) -> SuggestionOutput:
        """
        Make a suggestion the live one, replacing any earlier proposal.

        Blank suggestions are ignored; over-long ones are rejected.
        """
        size = len(inp.suggestion.suggested_text)
        if size > self._rules.max_suggested_chars:
            error = LifecycleValidationError(
                code="VALIDATION_ERROR",
                message=f"Suggestion too long ({size} > {self._rules.max_suggested_chars})",
                field="suggested_text",
            )
            current = _state(inp.session)
            return SuggestionOutput(
                suggestion=current.suggestion,
                visible=current.visible,
                errors=[error],
                success=False,
            )

        inp.session.queue.propose(inp.suggestion)
        return _state(inp.session)

    def run_preview(self, inp: PreviewInput) -> PreviewOutput:
        suggestion = inp.session.queue.peek()
        if suggestion is None:
            return PreviewOutput(markup=None, errors=[NO_SUGGESTION], success=False)
        try:
            doc = self._documents.load_document(inp.session.document_id)
            markup = self._strategy.merge(doc.body, suggestion)
        except LifecycleError as e:
            return PreviewOutput(markup=None, errors=[to_error(e)], success=False)
        return PreviewOutput(markup=markup)

    def run_dismiss(self, inp: DismissInput) -> SuggestionOutput:
        inp.session.queue.dismiss()
        return _state(inp.session)

    def run_accept(self, inp: AcceptInput) -> AcceptOutput:
        """
        Merge the live suggestion into the document and save it.

        On any failure the suggestion stays live and the document keeps its
        content, so the caller may retry (e.g. as a different actor).
        """
        session = inp.session
        suggestion = session.queue.peek()
        if suggestion is None:
            return AcceptOutput(document=None, errors=[NO_SUGGESTION], success=False)

        with self._locks.hold(session.document_id):
            try:
                before = self._documents.load_document(session.document_id)
                body = self._strategy.merge(before.body, suggestion)
                now = self._clock.now()
                registry = AssignmentRegistry(self._assignments.load_assignments())
                after = edit_body(before, inp.actor, body, registry, now)
                commit_edit(
                    self._documents, self._revisions, before, after, inp.actor.id, "suggestion", now
                )
            except LifecycleError as e:
                logger.warning(
                    "Accepting suggestion on %s by %s failed: %s %s",
                    session.document_id,
                    inp.actor.id,
                    e.code,
                    e.message,
                )
                return AcceptOutput(document=None, errors=[to_error(e)], success=False)

            # Only drop the suggestion once the document and revision are stored
            session.queue.accept()

        logger.info(
            "Suggestion %s (%s) merged into %s by %s",
            suggestion.change_id or "-",
            suggestion.operation_type,
            after.id,
            inp.actor.id,
        )
        return AcceptOutput(document=after)

    def run(
        self, inp: ProposeInput | PreviewInput | DismissInput | AcceptInput
    ) -> SuggestionOutput | PreviewOutput | AcceptOutput:
        if isinstance(inp, ProposeInput):
            return self.run_propose(inp)
        elif isinstance(inp, PreviewInput):
            return self.run_preview(inp)
        elif isinstance(inp, DismissInput):
            return self.run_dismiss(inp)
        elif isinstance(inp, AcceptInput):
            return self.run_accept(inp)
        else:
            raise ValueError(f"Unknown input type: {type(inp)}")
