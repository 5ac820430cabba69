"""Lifecycle component port definitions."""

from src.ports.clock import ClockPort
from src.ports.notify import NotifierPort
from src.ports.repo import AssignmentStorePort, DocumentRepoPort, RevisionRepoPort

__all__ = [
    "AssignmentStorePort",
    "ClockPort",
    "DocumentRepoPort",
    "NotifierPort",
    "RevisionRepoPort",
]
