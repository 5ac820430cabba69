from typing import Protocol

from src.domain.entities import Actor


class ActorProviderPort(Protocol):
    def current_actor(self) -> Actor:
        """Return the trusted actor for this session."""
        ...
