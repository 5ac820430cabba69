"""
Actor providers.

Whether a mock identity is used is decided once, from IdentityRules passed in
at construction. There is no module-level switch.
"""

import logging

from src.domain.entities import Actor
from src.domain.errors import AuthorizationError
from src.rules.models import IdentityRules

logger = logging.getLogger(__name__)


class SessionActorProvider:
    """Wraps the actor handed over by the (trusted) session layer."""

    def __init__(self, actor: Actor | None) -> None:
        self._actor = actor

    def current_actor(self) -> Actor:
        if self._actor is None:
            raise AuthorizationError("No actor in session", field="actor")
        return self._actor


class MockActorProvider:
    def __init__(self, rules: IdentityRules) -> None:
        self._actor = Actor(id=rules.mock_actor_id, role=rules.mock_role, name="Mock User")

    def current_actor(self) -> Actor:
        return self._actor


def create_actor_provider(
    rules: IdentityRules, session_actor: Actor | None = None
) -> SessionActorProvider | MockActorProvider:
    if rules.use_mock:
        logger.warning("Mock identity enabled; acting as %s", rules.mock_actor_id)
        return MockActorProvider(rules)
    return SessionActorProvider(session_actor)
