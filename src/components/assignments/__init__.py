"""
Assignments component - editor/publisher review relations.

Only admins create or delete relations; anyone may look them up.
"""

from .component import AssignmentComponent
from .models import (
    AssignInput,
    AssignmentListOutput,
    AssignmentOutput,
    ListAssignmentsInput,
    UnassignInput,
)
from .ports import AssignmentStorePort

__all__ = [
    "AssignmentComponent",
    # Input models
    "AssignInput",
    "UnassignInput",
    "ListAssignmentsInput",
    # Output models
    "AssignmentOutput",
    "AssignmentListOutput",
    # Ports
    "AssignmentStorePort",
]
