from typing import Protocol

from src.domain.entities import LifecycleEvent


class NotifierPort(Protocol):
    def notify(self, event: LifecycleEvent) -> None: ...
