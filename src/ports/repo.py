from collections.abc import Iterable
from typing import Protocol

from src.domain.entities import AssignmentRelation, Document, Revision


class DocumentRepoPort(Protocol):
    def load_document(self, document_id: str) -> Document:
        """Raises DocumentNotFoundError if absent."""
        ...

    def save_document(self, doc: Document) -> Document:
        """Raises ConcurrencyConflictError if doc.version is stale."""
        ...


class AssignmentStorePort(Protocol):
    def load_assignments(self) -> set[AssignmentRelation]: ...
    def save_assignments(self, relations: Iterable[AssignmentRelation]) -> None: ...


class RevisionRepoPort(Protocol):
    def next_revision_no(self, document_id: str) -> int: ...
    def save(self, revision: Revision) -> Revision: ...
    def list_for_document(self, document_id: str) -> list[Revision]: ...
