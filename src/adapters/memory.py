"""In-memory persistence adapters for tests and local development."""

import logging
from collections.abc import Iterable
from threading import Lock

from src.domain.entities import AssignmentRelation, Document, Revision
from src.domain.errors import ConcurrencyConflictError, DocumentNotFoundError

logger = logging.getLogger(__name__)


def check_version(stored: Document | None, incoming: Document) -> None:
    """
    Optimistic-concurrency rule shared by all document repositories.

    A new document may be saved at any version; an existing one only at
    exactly stored.version + 1.
    """
    if stored is None:
        return
    if incoming.version != stored.version + 1:
        raise ConcurrencyConflictError(
            f"Document {incoming.id!r} was modified concurrently "
            f"(stored version {stored.version}, incoming {incoming.version})",
            field="version",
        )


class InMemoryDocumentRepo:
    def __init__(self) -> None:
        self._lock = Lock()
        self._docs: dict[str, Document] = {}

    def add(self, doc: Document) -> None:
        """Seed a document without the version check."""
        with self._lock:
            self._docs[doc.id] = doc

    def load_document(self, document_id: str) -> Document:
        with self._lock:
            doc = self._docs.get(document_id)
        if doc is None:
            raise DocumentNotFoundError(f"Document {document_id!r} not found", field="document_id")
        return doc

    def save_document(self, doc: Document) -> Document:
        with self._lock:
            check_version(self._docs.get(doc.id), doc)
            self._docs[doc.id] = doc
        logger.debug("Saved document %s at version %d", doc.id, doc.version)
        return doc


class InMemoryAssignmentStore:
    def __init__(self, relations: Iterable[AssignmentRelation] = ()) -> None:
        self._relations: set[AssignmentRelation] = set(relations)

    def load_assignments(self) -> set[AssignmentRelation]:
        return set(self._relations)

    def save_assignments(self, relations: Iterable[AssignmentRelation]) -> None:
        self._relations = set(relations)


class InMemoryRevisionRepo:
    def __init__(self) -> None:
        self._revisions: dict[str, list[Revision]] = {}

    def next_revision_no(self, document_id: str) -> int:
        return len(self._revisions.get(document_id, [])) + 1

    def save(self, revision: Revision) -> Revision:
        self._revisions.setdefault(revision.document_id, []).append(revision)
        return revision

    def list_for_document(self, document_id: str) -> list[Revision]:
        """Newest first."""
        revisions = self._revisions.get(document_id, [])
        return sorted(revisions, key=lambda r: r.revision_no, reverse=True)
