import sqlite3
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from src.domain.entities import AssignmentRelation, Document, DocumentStatus, Revision
from src.domain.errors import ConcurrencyConflictError, DocumentNotFoundError


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class _SQLiteRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class SQLiteDocumentRepo(_SQLiteRepo):
    def load_document(self, document_id: str) -> Document:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM documents WHERE id = ?", (document_id,)).fetchone()
        finally:
            conn.close()
        if not row:
            raise DocumentNotFoundError(f"Document {document_id!r} not found", field="document_id")
        return Document(
            id=row["id"],
            title=row["title"],
            body=row["body"],
            status=DocumentStatus(row["status"]),
            author_id=row["author_id"],
            assigned_publisher_id=row["assigned_publisher_id"],
            created_at=_dt(row["created_at"]),
            updated_at=_dt(row["updated_at"]),
            published_at=_dt(row["published_at"]),
            version=row["version"],
        )

    def save_document(self, doc: Document) -> Document:
        """
        Insert a new document or update an existing one at version - 1.

        The version comparison happens inside the UPDATE, so two writers
        racing on the same row cannot both succeed.
        """
        values = (
            doc.title,
            doc.body,
            doc.status.value,
            doc.author_id,
            doc.assigned_publisher_id,
            doc.created_at.isoformat(),
            doc.updated_at.isoformat(),
            _iso(doc.published_at),
            doc.version,
        )
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                UPDATE documents SET
                    title = ?, body = ?, status = ?, author_id = ?,
                    assigned_publisher_id = ?, created_at = ?, updated_at = ?,
                    published_at = ?, version = ?
                WHERE id = ? AND version = ?
                """,
                (*values, doc.id, doc.version - 1),
            )
            if cur.rowcount == 0:
                exists = conn.execute(
                    "SELECT version FROM documents WHERE id = ?", (doc.id,)
                ).fetchone()
                if exists:
                    raise ConcurrencyConflictError(
                        f"Document {doc.id!r} was modified concurrently "
                        f"(stored version {exists['version']}, incoming {doc.version})",
                        field="version",
                    )
                conn.execute(
                    """
                    INSERT INTO documents (
                        title, body, status, author_id, assigned_publisher_id,
                        created_at, updated_at, published_at, version, id
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (*values, doc.id),
                )
            conn.commit()
            return doc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


class SQLiteAssignmentStore(_SQLiteRepo):
    def load_assignments(self) -> set[AssignmentRelation]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT editor_id, publisher_id FROM assignment_relations").fetchall()
        finally:
            conn.close()
        return {AssignmentRelation(**row) for row in rows}

    def save_assignments(self, relations: Iterable[AssignmentRelation]) -> None:
        """Replace the stored relation set in one transaction."""
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM assignment_relations")
            conn.executemany(
                "INSERT INTO assignment_relations (editor_id, publisher_id) VALUES (?, ?)",
                [(r.editor_id, r.publisher_id) for r in relations],
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


class SQLiteRevisionRepo(_SQLiteRepo):
    def next_revision_no(self, document_id: str) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT COALESCE(MAX(revision_no), 0) AS n FROM document_revisions "
                "WHERE document_id = ?",
                (document_id,),
            ).fetchone()
        finally:
            conn.close()
        return int(row["n"]) + 1

    def save(self, revision: Revision) -> Revision:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO document_revisions (
                    id, document_id, revision_no, field_name, original_content,
                    modified_content, change_type, source, created_by, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    revision.id,
                    revision.document_id,
                    revision.revision_no,
                    revision.field_name,
                    revision.original_content,
                    revision.modified_content,
                    revision.change_type,
                    revision.source,
                    revision.created_by,
                    revision.created_at.isoformat(),
                ),
            )
            conn.commit()
            return revision
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConcurrencyConflictError(
                f"Revision {revision.revision_no} of document {revision.document_id!r} "
                "was written concurrently",
                field="revision_no",
            ) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def list_for_document(self, document_id: str) -> list[Revision]:
        """Newest first."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM document_revisions WHERE document_id = ? ORDER BY revision_no DESC",
                (document_id,),
            ).fetchall()
        finally:
            conn.close()
        for row in rows:
            row["created_at"] = _dt(row["created_at"])
        return [Revision(**row) for row in rows]
