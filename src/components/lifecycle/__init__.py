"""Lifecycle component - role-gated document status transitions."""

from src.components.lifecycle.component import LifecycleComponent, commit_edit, to_error
from src.components.lifecycle.models import (
    AllowedTransitionsInput,
    AllowedTransitionsOutput,
    EditBodyInput,
    LifecycleValidationError,
    PublishInput,
    ReturnToDraftInput,
    SubmitForReviewInput,
    TransitionInput,
    TransitionOutput,
    UnpublishInput,
)
from src.components.lifecycle.ports import (
    AssignmentStorePort,
    ClockPort,
    DocumentRepoPort,
    NotifierPort,
    RevisionRepoPort,
)

__all__ = [
    # Component
    "LifecycleComponent",
    "to_error",
    "commit_edit",
    # Models
    "TransitionInput",
    "SubmitForReviewInput",
    "ReturnToDraftInput",
    "PublishInput",
    "UnpublishInput",
    "EditBodyInput",
    "AllowedTransitionsInput",
    "TransitionOutput",
    "AllowedTransitionsOutput",
    "LifecycleValidationError",
    # Ports
    "DocumentRepoPort",
    "AssignmentStorePort",
    "RevisionRepoPort",
    "NotifierPort",
    "ClockPort",
]
