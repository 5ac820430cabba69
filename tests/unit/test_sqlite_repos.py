import os
from datetime import timedelta

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import (
    SQLiteAssignmentStore,
    SQLiteDocumentRepo,
    SQLiteRevisionRepo,
)
from src.domain.entities import AssignmentRelation, Document, DocumentStatus
from src.domain.errors import ConcurrencyConflictError, DocumentNotFoundError
from src.domain.revisions import build_revision


@pytest.fixture
def db_path(tmp_path) -> str:
    path = os.path.join(str(tmp_path), "lifecycle.db")
    SQLiteMigrator(path).run_migrations()
    return path


def test_migrations_apply_once(tmp_path):
    path = os.path.join(str(tmp_path), "m.db")
    migrator = SQLiteMigrator(path)
    assert migrator.run_migrations() == ["0001_lifecycle.sql"]
    assert migrator.run_migrations() == []


def test_document_roundtrip(db_path, clock):
    repo = SQLiteDocumentRepo(db_path)
    doc = Document(
        id="d1",
        title="Fire Safety",
        body="<p>Exit</p>",
        status=DocumentStatus.UNDER_REVIEW,
        author_id="ed1",
        assigned_publisher_id="pub1",
        created_at=clock.now(),
        updated_at=clock.now(),
    )
    repo.save_document(doc)

    loaded = repo.load_document("d1")
    assert loaded == doc
    assert loaded.status == DocumentStatus.UNDER_REVIEW


def test_missing_document(db_path):
    with pytest.raises(DocumentNotFoundError):
        SQLiteDocumentRepo(db_path).load_document("missing")


def test_stale_write_rejected(db_path, clock):
    repo = SQLiteDocumentRepo(db_path)
    doc = Document(id="d1", title="T", author_id="ed1", created_at=clock.now(), updated_at=clock.now())
    repo.save_document(doc)

    later = clock.now() + timedelta(minutes=5)
    repo.save_document(doc.model_copy(update={"body": "a", "version": 1, "updated_at": later}))

    with pytest.raises(ConcurrencyConflictError):
        repo.save_document(doc.model_copy(update={"body": "b", "version": 1}))
    loaded = repo.load_document("d1")
    assert loaded.body == "a"
    assert loaded.version == 1


def test_assignment_store(db_path):
    store = SQLiteAssignmentStore(db_path)
    assert store.load_assignments() == set()

    relations = {
        AssignmentRelation(editor_id="ed1", publisher_id="pub1"),
        AssignmentRelation(editor_id="ed2", publisher_id="pub1"),
    }
    store.save_assignments(relations)
    assert store.load_assignments() == relations

    store.save_assignments([AssignmentRelation(editor_id="ed2", publisher_id="pub1")])
    assert store.load_assignments() == {AssignmentRelation(editor_id="ed2", publisher_id="pub1")}


def test_revisions(db_path, clock):
    SQLiteDocumentRepo(db_path).save_document(
        Document(id="d1", title="T", author_id="ed1", created_at=clock.now(), updated_at=clock.now())
    )
    repo = SQLiteRevisionRepo(db_path)
    assert repo.next_revision_no("d1") == 1

    repo.save(build_revision("d1", 1, "", "<p>a</p>", "ed1", "edit", clock.now()))
    repo.save(build_revision("d1", 2, "<p>a</p>", "<p>b</p>", "ed1", "suggestion", clock.now()))

    revisions = repo.list_for_document("d1")
    assert [r.revision_no for r in revisions] == [2, 1]
    assert revisions[0].source == "suggestion"
    assert revisions[1].change_type == "addition"
    assert revisions[0].created_at == clock.now()
    assert repo.next_revision_no("d1") == 3


def test_duplicate_revision_number_is_a_conflict(db_path, clock):
    SQLiteDocumentRepo(db_path).save_document(
        Document(id="d1", title="T", author_id="ed1", created_at=clock.now(), updated_at=clock.now())
    )
    repo = SQLiteRevisionRepo(db_path)
    repo.save(build_revision("d1", 1, "", "<p>a</p>", "ed1", "edit", clock.now()))

    with pytest.raises(ConcurrencyConflictError):
        repo.save(build_revision("d1", 1, "<p>a</p>", "<p>b</p>", "ed1", "edit", clock.now()))

    assert len(repo.list_for_document("d1")) == 1
