"""Helpers for tracked changes and AI-assisted suggestions."""

from enum import Enum
from uuid import uuid4

from src.domain.entities import Suggestion


class AIOperation(str, Enum):
    IMPROVE_WRITING = "improve-writing"
    GRAMMAR_CHECK = "grammar-check"
    TONE_FORMAL = "tone-formal"
    TONE_CASUAL = "tone-casual"
    POLICY_LANGUAGE = "policy-language"
    SUMMARIZE = "summarize"
    EXPAND_CONTENT = "expand-content"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    AIOperation.IMPROVE_WRITING: "Improve Writing",
    AIOperation.GRAMMAR_CHECK: "Grammar Check",
    AIOperation.TONE_FORMAL: "Make Formal",
    AIOperation.TONE_CASUAL: "Make Casual",
    AIOperation.POLICY_LANGUAGE: "Policy Language",
    AIOperation.SUMMARIZE: "Summarize",
    AIOperation.EXPAND_CONTENT: "Expand Content",
}


def operation_display_name(operation: str) -> str:
    """Display name for a known operation, else the raw value."""
    try:
        return AIOperation(operation).display_name
    except ValueError:
        return operation


def generate_change_id() -> str:
    return str(uuid4())


def user_initials(name: str | None = None, email: str | None = None) -> str:
    """
    Initials used to tag tracked changes.

    Up to three initials from a display name; otherwise the first two letters
    of the e-mail local part; otherwise "U".
    """
    if name and name != email:
        initials = "".join(word[0].upper() for word in name.split())[:3]
        return initials or "U"

    if email:
        username = email.split("@")[0]
        return username[:2].upper() or "U"

    return "U"


def ai_suggestion(
    original_text: str,
    improved_text: str,
    operation: AIOperation | str,
    initials: str = "AI",
) -> Suggestion:
    """Wrap an assistant's output as an ai-origin suggestion."""
    op = operation.value if isinstance(operation, AIOperation) else operation
    return Suggestion(
        original_text=original_text,
        suggested_text=improved_text,
        operation_type=op,
        operation_description=operation_display_name(op),
        origin="ai",
        change_id=generate_change_id(),
        author_initials=f"AI-{initials}",
    )


def tracked_change(
    original_text: str,
    suggested_text: str,
    name: str | None = None,
    email: str | None = None,
    description: str = "",
) -> Suggestion:
    """Wrap a human editor's proposed change."""
    return Suggestion(
        original_text=original_text,
        suggested_text=suggested_text,
        operation_type="tracked-change",
        operation_description=description,
        origin="tracked-change",
        change_id=generate_change_id(),
        author_initials=user_initials(name, email),
    )
