"""
Suggestions component port definitions.
"""

from src.domain.merge import MergeStrategy
from src.ports.clock import ClockPort
from src.ports.repo import AssignmentStorePort, DocumentRepoPort, RevisionRepoPort

__all__ = [
    "AssignmentStorePort",
    "ClockPort",
    "DocumentRepoPort",
    "MergeStrategy",
    "RevisionRepoPort",
]
