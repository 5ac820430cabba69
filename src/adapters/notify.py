import logging

from src.domain.entities import LifecycleEvent

logger = logging.getLogger(__name__)


class InMemoryNotifier:
    """Collects events; used by tests and the dev shell."""

    def __init__(self) -> None:
        self.events: list[LifecycleEvent] = []

    def notify(self, event: LifecycleEvent) -> None:
        self.events.append(event)

    def for_recipient(self, recipient_id: str) -> list[LifecycleEvent]:
        return [e for e in self.events if e.recipient_id == recipient_id]

    def clear(self) -> None:
        self.events.clear()


class LoggingNotifier:
    """Writes events to the log instead of delivering them."""

    def __init__(self, log_level: int = logging.INFO) -> None:
        self.log_level = log_level

    def notify(self, event: LifecycleEvent) -> None:
        logger.log(
            self.log_level,
            "[%s] %s -> %s: %s",
            event.event_type,
            event.actor_id,
            event.recipient_id,
            event.title,
        )
