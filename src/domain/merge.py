"""
Change merge engine.

Accepting a suggestion replaces the whole document body with the suggested
text rendered as block markup:

    "One\n\nTwo\nlines"  ->  "<p>One</p><p>Two<br>lines</p>"

There is no positional patching. Re-merging already merged markup wraps it
again, so merge is not idempotent.

Suggested text is HTML-escaped before wrapping by default, so "A & B" becomes
"<p>A &amp; B</p>" and markup typed into a suggestion is shown, not
interpreted. Pass escape=False (or set suggestions.escape_html: false) to
insert the text verbatim, as the older editor did.
"""

import html
import re
from typing import Protocol

from src.domain.entities import Suggestion
from src.domain.errors import ValidationError

PARAGRAPH_BREAK = "\n\n"
LINE_BREAK = "\n"
BLOCK_OPEN = "<p>"
BLOCK_CLOSE = "</p>"
INLINE_BREAK = "<br>"

_BLOCK_RE = re.compile(re.escape(BLOCK_OPEN) + r".*?" + re.escape(BLOCK_CLOSE), re.DOTALL)


class MergeStrategy(Protocol):
    def merge(self, document_body: str, suggestion: Suggestion) -> str:
        """Return the new canonical body; must not mutate anything."""
        ...


def split_paragraphs(text: str) -> list[str]:
    """Non-blank paragraphs of plain text, edge newlines trimmed."""
    normalized = text.replace("\r\n", "\n")
    return [p.strip("\n") for p in normalized.split(PARAGRAPH_BREAK) if p.strip()]


def to_block_markup(text: str, escape: bool = True) -> str:
    """
    Render plain text as paragraph blocks with inline breaks.

    Raises:
        ValidationError: If text has no non-blank paragraph.
    """
    paragraphs = split_paragraphs(text)
    if not paragraphs:
        raise ValidationError("Suggested text is empty", field="suggested_text")

    blocks = []
    for paragraph in paragraphs:
        if escape:
            paragraph = html.escape(paragraph, quote=False)
        blocks.append(BLOCK_OPEN + paragraph.replace(LINE_BREAK, INLINE_BREAK) + BLOCK_CLOSE)
    return "".join(blocks)


def count_paragraphs(markup: str) -> int:
    return len(_BLOCK_RE.findall(markup))


class WholeDocumentMerge:
    """Replace the entire body with the suggested text."""

    def __init__(self, escape_html: bool = True):
        self.escape_html = escape_html

    def merge(self, document_body: str, suggestion: Suggestion) -> str:
        _ = document_body  # replaced wholesale
        return to_block_markup(suggestion.suggested_text, escape=self.escape_html)


DEFAULT_STRATEGY = WholeDocumentMerge()


def merge(document_body: str, suggestion: Suggestion) -> str:
    return DEFAULT_STRATEGY.merge(document_body, suggestion)
