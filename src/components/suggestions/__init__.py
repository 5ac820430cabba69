"""
Suggestions component - previewable, explicitly accepted text changes.
"""

from .component import NO_SUGGESTION, SuggestionComponent
from .models import (
    AcceptInput,
    AcceptOutput,
    DismissInput,
    EditingSession,
    PreviewInput,
    PreviewOutput,
    ProposeInput,
    SuggestionOutput,
)
from .ports import (
    AssignmentStorePort,
    ClockPort,
    DocumentRepoPort,
    MergeStrategy,
    RevisionRepoPort,
)

__all__ = [
    "SuggestionComponent",
    "EditingSession",
    "NO_SUGGESTION",
    # Input models
    "ProposeInput",
    "PreviewInput",
    "DismissInput",
    "AcceptInput",
    # Output models
    "SuggestionOutput",
    "PreviewOutput",
    "AcceptOutput",
    # Ports
    "DocumentRepoPort",
    "AssignmentStorePort",
    "RevisionRepoPort",
    "MergeStrategy",
    "ClockPort",
]
