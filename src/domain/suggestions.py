"""
Suggestion queue for one editing session.

Holds at most one live suggestion. Proposing a new one replaces the previous
("latest wins"); there is no backlog.
"""

from src.domain.entities import Suggestion


class SuggestionQueue:
    def __init__(self) -> None:
        self._current: Suggestion | None = None
        self._visible = False

    @property
    def visible(self) -> bool:
        return self._visible

    def propose(self, suggestion: Suggestion) -> None:
        if not suggestion.suggested_text.strip():
            return
        self._current = suggestion
        self._visible = True

    def dismiss(self) -> None:
        self._current = None
        self._visible = False

    def peek(self) -> Suggestion | None:
        return self._current

    def accept(self) -> Suggestion | None:
        """Take the live suggestion out of the queue for merging."""
        suggestion = self._current
        self.dismiss()
        return suggestion
