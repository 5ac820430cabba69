"""
End-to-end review flow through LifecycleContext.

Runs the same scenarios against the in-memory and the SQLite wiring.
"""

from datetime import UTC, datetime

import pytest

from src.components.suggestions import DismissInput
from src.domain.entities import Actor, Document, DocumentStatus
from src.domain.errors import AuthorizationError
from src.domain.tracking import AIOperation, ai_suggestion
from src.rules.models import IdentityRules, ProjectRules, Rules
from src.shell.context import LifecycleContext

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

ADMIN = Actor(id="admin1", role="admin")
ED1 = Actor(id="ed1", role="edit", name="Eddie Editor")
PUB1 = Actor(id="pub1", role="publish")
PUB2 = Actor(id="pub2", role="publish")


class SwitchableActor:
    """Actor provider whose session user can be swapped mid-test."""

    def __init__(self, actor: Actor | None = None) -> None:
        self.actor = actor

    def current_actor(self) -> Actor:
        if self.actor is None:
            raise AuthorizationError("No actor in session")
        return self.actor


@pytest.fixture
def rules() -> Rules:
    return Rules(project=ProjectRules(slug="policy-lifecycle-test", rules_version="1.0"))


@pytest.fixture(params=["memory", "sqlite"])
def ctx(request, rules, tmp_path):
    if request.param == "memory":
        context = LifecycleContext.in_memory(rules, session_actor=ADMIN)
        context.document_repo.add(
            Document(id="doc1", title="Hand Hygiene", body="<p>Wash hands.</p>", author_id="ed1")
        )
    else:
        context = LifecycleContext.create(str(tmp_path / "lifecycle.db"), rules, session_actor=ADMIN)
        context.document_repo.save_document(
            Document(
                id="doc1",
                title="Hand Hygiene",
                body="<p>Wash hands.</p>",
                author_id="ed1",
                created_at=NOW,
                updated_at=NOW,
            )
        )
    context.actors = SwitchableActor(ADMIN)
    return context


def act_as(ctx: LifecycleContext, actor: Actor) -> None:
    ctx.actors.actor = actor


def test_submit_without_relation_then_with(ctx):
    act_as(ctx, ED1)
    denied = ctx.submit_for_review("doc1", "pub1")
    assert denied.success is False
    assert denied.errors[0].code == "VALIDATION_ERROR"
    assert ctx.document_repo.load_document("doc1").status == DocumentStatus.DRAFT

    act_as(ctx, ADMIN)
    assert ctx.assign("ed1", "pub1").success is True

    act_as(ctx, ED1)
    result = ctx.submit_for_review("doc1", "pub1")
    assert result.success is True

    stored = ctx.document_repo.load_document("doc1")
    assert stored.status == DocumentStatus.UNDER_REVIEW
    assert stored.assigned_publisher_id == "pub1"


def test_full_cycle_with_suggestion(ctx):
    act_as(ctx, ADMIN)
    ctx.assign("ed1", "pub1")

    # Editor accepts an AI rewrite, then submits
    act_as(ctx, ED1)
    session = ctx.open_session("doc1")
    ctx.propose(
        session,
        ai_suggestion("Wash hands.", "Wash hands.\n\nUse soap.", AIOperation.EXPAND_CONTENT),
    )
    accepted = ctx.accept(session)
    assert accepted.success is True
    assert accepted.document.body == "<p>Wash hands.</p><p>Use soap.</p>"
    assert ctx.submit_for_review("doc1", "pub1").success is True

    # An unassigned publisher cannot decide
    act_as(ctx, PUB2)
    denied = ctx.publish("doc1")
    assert denied.errors[0].code == "PERMISSION_DENIED"
    assert ctx.document_repo.load_document("doc1").status == DocumentStatus.UNDER_REVIEW

    # Assigned publisher returns it, editor resubmits, publisher publishes
    act_as(ctx, PUB1)
    assert ctx.return_to_draft("doc1", note="Add a source").success is True
    act_as(ctx, ED1)
    assert ctx.edit("doc1", "<p>Wash hands. See WHO 2009.</p>").success is True
    assert ctx.submit_for_review("doc1", "pub1").success is True
    act_as(ctx, PUB1)
    published = ctx.publish("doc1")
    assert published.success is True
    assert published.document.published_at is not None

    # Only an admin takes it back
    act_as(ctx, ED1)
    assert ctx.unpublish("doc1").errors[0].code == "PERMISSION_DENIED"
    act_as(ctx, ADMIN)
    assert ctx.unpublish("doc1").document.status == DocumentStatus.DRAFT

    history = ctx.revision_repo.list_for_document("doc1")
    assert [r.source for r in history] == ["edit", "suggestion"]


def test_dismissed_suggestion_changes_nothing(ctx):
    act_as(ctx, ED1)
    before = ctx.document_repo.load_document("doc1")
    session = ctx.open_session("doc1")
    ctx.propose(session, ai_suggestion("x", "Rewritten", AIOperation.TONE_FORMAL))

    dismissed = ctx.suggestions.run(DismissInput(session=session))

    assert dismissed.suggestion is None
    assert dismissed.visible is False
    after = ctx.document_repo.load_document("doc1")
    assert after == before
    assert ctx.revision_repo.list_for_document("doc1") == []


def test_mock_identity_acts_as_configured_admin(rules):
    rules = rules.model_copy(update={"identity": IdentityRules(use_mock=True)})
    ctx = LifecycleContext.in_memory(rules)

    assert ctx.actors.current_actor().id == "mock-admin"
    assert ctx.assign("ed1", "pub1").success is True


def test_missing_session_actor_is_an_error(rules):
    ctx = LifecycleContext.in_memory(rules)

    with pytest.raises(AuthorizationError):
        ctx.assign("ed1", "pub1")
