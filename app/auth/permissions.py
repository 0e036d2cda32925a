"""
Central registry of allowed actions per role.
"""
import logging
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"


class Country(str, Enum):
    INDIA = "india"
    AMERICA = "america"


class Action(str, Enum):
    VIEW_RESTAURANTS = "view_restaurants"
    CREATE_ORDER = "create_order"
    PLACE_ORDER = "place_order"
    CANCEL_ORDER = "cancel_order"
    UPDATE_PAYMENT_METHOD = "update_payment_method"


ROLE_PERMISSIONS = {
    Role.ADMIN: (
        Action.VIEW_RESTAURANTS,
        Action.CREATE_ORDER,
        Action.PLACE_ORDER,
        Action.CANCEL_ORDER,
        Action.UPDATE_PAYMENT_METHOD,
    ),
    Role.MANAGER: (
        Action.VIEW_RESTAURANTS,
        Action.CREATE_ORDER,
        Action.PLACE_ORDER,
        Action.CANCEL_ORDER,
    ),
    Role.MEMBER: (
        Action.VIEW_RESTAURANTS,
        Action.CREATE_ORDER,
    ),
}

# Exempt from country partitioning.
UNRESTRICTED_ROLE = Role.ADMIN


def _coerce(enum_cls, value) -> Optional[Enum]:
    try:
        return enum_cls(value)
    except ValueError:
        return None


class PermissionCatalog:
    """Immutable role -> actions table.

    Built once and shared by reference; lookups never mutate it. A role
    missing from the table has no permissions at all.
    """

    def __init__(
        self,
        table: Mapping[Role, Iterable[Action]] = None,
        unrestricted_role: Role = UNRESTRICTED_ROLE,
    ):
        if table is None:
            table = ROLE_PERMISSIONS
        self._table = MappingProxyType({
            Role(role): frozenset(Action(a) for a in actions)
            for role, actions in table.items()
        })
        self.unrestricted_role = Role(unrestricted_role)

    @property
    def roles(self) -> FrozenSet[Role]:
        return frozenset(self._table)

    def permissions_for(self, role) -> FrozenSet[Action]:
        key = _coerce(Role, role)
        if key is None or key not in self._table:
            logger.error("No permission catalog entry for role %r", role)
            return frozenset()
        return self._table[key]

    def has_permission(self, role, action) -> bool:
        key = _coerce(Action, action)
        if key is None:
            return False
        return key in self.permissions_for(role)

    def is_unrestricted(self, role) -> bool:
        return _coerce(Role, role) == self.unrestricted_role


DEFAULT_CATALOG = PermissionCatalog()


def permissions_for(role) -> FrozenSet[Action]:
    return DEFAULT_CATALOG.permissions_for(role)


def has_permission(role, action) -> bool:
    return DEFAULT_CATALOG.has_permission(role, action)
