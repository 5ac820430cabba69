from dataclasses import dataclass, field

from src.components.lifecycle.models import LifecycleValidationError
from src.domain.entities import Actor, AssignmentRelation


@dataclass(frozen=True)
class AssignInput:
    actor: Actor
    editor_id: str
    publisher_id: str


@dataclass(frozen=True)
class UnassignInput:
    actor: Actor
    editor_id: str
    publisher_id: str


@dataclass(frozen=True)
class ListAssignmentsInput:
    """Set exactly one of editor_id (-> publishers) or publisher_id (-> editors)."""

    editor_id: str | None = None
    publisher_id: str | None = None


@dataclass(frozen=True)
class AssignmentOutput:
    relations: frozenset[AssignmentRelation] = frozenset()
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class AssignmentListOutput:
    actor_ids: set[str] = field(default_factory=set)
    errors: list[LifecycleValidationError] = field(default_factory=list)
    success: bool = True
