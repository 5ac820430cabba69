import pytest

from src.adapters.identity import MockActorProvider, SessionActorProvider, create_actor_provider
from src.domain.entities import Actor
from src.domain.errors import AuthorizationError
from src.domain.roles import Role
from src.rules.models import IdentityRules


def test_session_provider_returns_trusted_actor(ed1):
    provider = create_actor_provider(IdentityRules(), ed1)
    assert isinstance(provider, SessionActorProvider)
    assert provider.current_actor() == ed1


def test_session_provider_without_actor():
    provider = create_actor_provider(IdentityRules(use_mock=False))
    with pytest.raises(AuthorizationError, match="No actor"):
        provider.current_actor()


def test_mock_provider_from_explicit_config():
    rules = IdentityRules(use_mock=True, mock_actor_id="tester", mock_role="publish")
    provider = create_actor_provider(rules, Actor(id="ignored", role="edit"))
    assert isinstance(provider, MockActorProvider)
    assert provider.current_actor().id == "tester"
    assert provider.current_actor().role == Role.PUBLISH


def test_providers_are_independent():
    mock = create_actor_provider(IdentityRules(use_mock=True))
    real = create_actor_provider(IdentityRules(use_mock=False), Actor(id="ed1", role="edit"))
    assert mock.current_actor().id == "mock-admin"
    assert real.current_actor().id == "ed1"
