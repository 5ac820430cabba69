"""
Role model: four roles in a total order of increasing privilege.

    readonly < edit < publish < admin

All privilege checks go through ``has_at_least``/``is_admin``.
"""

from enum import Enum

from src.domain.errors import ValidationError


class Role(str, Enum):
    READONLY = "readonly"
    EDIT = "edit"
    PUBLISH = "publish"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _RANKS[self]


ROLE_ORDER: tuple[Role, ...] = (Role.READONLY, Role.EDIT, Role.PUBLISH, Role.ADMIN)

_RANKS = {role: idx for idx, role in enumerate(ROLE_ORDER)}


def parse_role(value: Role | str) -> Role:
    """
    Convert a role literal into a Role.

    Raises:
        ValidationError: If value is not one of the four role literals.
    """
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError as e:
        raise ValidationError(f"Unknown role: {value!r}", field="role") from e


def has_at_least(actor_role: Role | str, threshold: Role | str) -> bool:
    return parse_role(actor_role).rank >= parse_role(threshold).rank


def is_admin(actor_role: Role | str) -> bool:
    return has_at_least(actor_role, Role.ADMIN)
