"""Time source for updated_at, published_at and revision timestamps."""

from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    def now(self) -> datetime:
        """Aware UTC datetime; the engine never reads the system clock itself."""
        ...
