import logging
from threading import Lock

from src.components.lifecycle.component import to_error
from src.components.lifecycle.models import LifecycleValidationError
from src.domain.assignments import AssignmentRegistry
from src.domain.errors import LifecycleError

from .models import (
    AssignInput,
    AssignmentListOutput,
    AssignmentOutput,
    ListAssignmentsInput,
    UnassignInput,
)
from .ports import AssignmentStorePort

logger = logging.getLogger(__name__)


class AssignmentComponent:
    """Admin management of editor -> publisher assignment relations."""

    def __init__(self, store: AssignmentStorePort) -> None:
        self._store = store
        # Guards the load-mutate-save of the whole relation set
        self._lock = Lock()

    def run_assign(self, inp: AssignInput) -> AssignmentOutput:
        with self._lock:
            registry = AssignmentRegistry(self._store.load_assignments())
            before = len(registry)
            try:
                registry.assign(inp.editor_id, inp.publisher_id, inp.actor.role)
            except LifecycleError as e:
                logger.warning("Assign %s -> %s by %s denied: %s",
                               inp.editor_id, inp.publisher_id, inp.actor.id, e.code)
                return AssignmentOutput(errors=[to_error(e)], success=False)
            if len(registry) != before:
                self._store.save_assignments(registry.relations())
                logger.info("Assigned publisher %s to editor %s", inp.publisher_id, inp.editor_id)
            return AssignmentOutput(relations=registry.relations())

    def run_unassign(self, inp: UnassignInput) -> AssignmentOutput:
        with self._lock:
            registry = AssignmentRegistry(self._store.load_assignments())
            before = len(registry)
            try:
                registry.unassign(inp.editor_id, inp.publisher_id, inp.actor.role)
            except LifecycleError as e:
                logger.warning("Unassign %s -> %s by %s denied: %s",
                               inp.editor_id, inp.publisher_id, inp.actor.id, e.code)
                return AssignmentOutput(errors=[to_error(e)], success=False)
            if len(registry) != before:
                self._store.save_assignments(registry.relations())
                logger.info("Unassigned publisher %s from editor %s", inp.publisher_id, inp.editor_id)
            return AssignmentOutput(relations=registry.relations())

    def run_list(self, inp: ListAssignmentsInput) -> AssignmentListOutput:
        registry = AssignmentRegistry(self._store.load_assignments())
        if inp.editor_id is not None and inp.publisher_id is None:
            return AssignmentListOutput(actor_ids=registry.publishers_for(inp.editor_id))
        if inp.publisher_id is not None and inp.editor_id is None:
            return AssignmentListOutput(actor_ids=registry.editors_for(inp.publisher_id))
        return AssignmentListOutput(
            errors=[
                LifecycleValidationError(
                    code="VALIDATION_ERROR",
                    message="Provide exactly one of editor_id or publisher_id",
                    field="editor_id",
                )
            ],
            success=False,
        )

    def run(
        self, inp: AssignInput | UnassignInput | ListAssignmentsInput
    ) -> AssignmentOutput | AssignmentListOutput:
        if isinstance(inp, AssignInput):
            return self.run_assign(inp)
        elif isinstance(inp, UnassignInput):
            return self.run_unassign(inp)
        elif isinstance(inp, ListAssignmentsInput):
            return self.run_list(inp)
        else:
            raise ValueError(f"Unknown input type: {type(inp)}")
