from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.adapters.clock import FixedClock
from src.domain.assignments import AssignmentRegistry
from src.domain.entities import Actor, AssignmentRelation, Document, DocumentStatus
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent
NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def rules() -> Rules:
    # Load the REAL rules file from the project root
    return load_rules(PROJECT_ROOT / "lifecycle_rules.yaml")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def admin() -> Actor:
    return Actor(id="admin1", role="admin", name="Ada Admin")


@pytest.fixture
def ed1() -> Actor:
    return Actor(id="ed1", role="edit", name="Eddie Editor")


@pytest.fixture
def ed2() -> Actor:
    return Actor(id="ed2", role="edit")


@pytest.fixture
def pub1() -> Actor:
    return Actor(id="pub1", role="publish")


@pytest.fixture
def pub2() -> Actor:
    return Actor(id="pub2", role="publish")


@pytest.fixture
def reader() -> Actor:
    return Actor(id="reader1", role="readonly")


@pytest.fixture
def registry() -> AssignmentRegistry:
    """ed1 is reviewed by pub1; pub2 reviews nobody."""
    return AssignmentRegistry([AssignmentRelation(editor_id="ed1", publisher_id="pub1")])


@pytest.fixture
def draft_doc() -> Document:
    return Document(
        id="doc1",
        title="Hand Hygiene",
        body="<p>Wash hands.</p>",
        author_id="ed1",
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def review_doc(draft_doc: Document) -> Document:
    return draft_doc.model_copy(
        update={
            "status": DocumentStatus.UNDER_REVIEW,
            "assigned_publisher_id": "pub1",
            "version": 1,
        }
    )
