"""
Assignment registry: which publishers may review which editors' documents.

Many-to-many set of (editor_id, publisher_id) pairs. Only admins mutate it.
Lookups and mutations share one lock so a lookup never sees a half-applied
change.
"""

from collections.abc import Iterable
from threading import RLock

from src.domain.entities import AssignmentRelation
from src.domain.errors import AuthorizationError
from src.domain.roles import Role, is_admin


class AssignmentRegistry:
    def __init__(self, relations: Iterable[AssignmentRelation] = ()):
        self._lock = RLock()
        self._relations: set[AssignmentRelation] = set(relations)

    def __len__(self) -> int:
        with self._lock:
            return len(self._relations)

    def _require_admin(self, requesting_role: Role | str, verb: str) -> None:
        if not is_admin(requesting_role):
            raise AuthorizationError(
                f"Role 'admin' required to {verb} assignments", field="role"
            )

    def assign(self, editor_id: str, publisher_id: str, requesting_role: Role | str) -> None:
        """
        Link an editor to a publisher. Re-assigning an existing pair is a no-op.

        Raises:
            AuthorizationError: If the requester is not an admin.
            InvalidAssignmentError: If editor and publisher are the same actor.
        """
        self._require_admin(requesting_role, "create")
        relation = AssignmentRelation.create(editor_id, publisher_id)
        with self._lock:
            self._relations.add(relation)

    def unassign(self, editor_id: str, publisher_id: str, requesting_role: Role | str) -> None:
        self._require_admin(requesting_role, "delete")
        with self._lock:
            self._relations.discard(
                AssignmentRelation(editor_id=editor_id, publisher_id=publisher_id)
            )

    def publishers_for(self, editor_id: str) -> set[str]:
        with self._lock:
            return {r.publisher_id for r in self._relations if r.editor_id == editor_id}

    def editors_for(self, publisher_id: str) -> set[str]:
        with self._lock:
            return {r.editor_id for r in self._relations if r.publisher_id == publisher_id}

    def is_assigned(self, editor_id: str, publisher_id: str) -> bool:
        relation = AssignmentRelation(editor_id=editor_id, publisher_id=publisher_id)
        with self._lock:
            return relation in self._relations

    def relations(self) -> frozenset[AssignmentRelation]:
        """Snapshot of the full relation set (for persistence)."""
        with self._lock:
            return frozenset(self._relations)
