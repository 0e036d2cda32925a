"""
Per-request access decisions.

Two independent checks gate every data access:

* ``authorize`` answers whether the actor's role grants an action, using
  the permission catalog only.
* ``scope_filter`` / ``can_access_partition`` restrict which country
  partition the actor may reach. The catalog's unrestricted role sees every
  partition; everyone else sees only their own.

Callers check the permission first, then the partition. Both must pass.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .permissions import DEFAULT_CATALOG, PermissionCatalog


def _value(obj):
    return getattr(obj, "value", obj)


class DenyReason(str, Enum):
    INSUFFICIENT_PERMISSION = "insufficient_permission"
    OUT_OF_PARTITION = "out_of_partition"


class AccessDenied(Exception):
    status_code = 403
    reason = DenyReason.INSUFFICIENT_PERMISSION
    default_message = "Insufficient permissions for this action"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InsufficientPermission(AccessDenied):
    pass


class OutOfPartition(AccessDenied):
    """Reported exactly like a missing record so existence is not leaked."""

    status_code = 404
    reason = DenyReason.OUT_OF_PARTITION
    default_message = "Resource not found"


@dataclass(frozen=True)
class Actor:
    id: str
    role: str
    country: str

    def __post_init__(self):
        for field in ("id", "role", "country"):
            if not getattr(self, field):
                raise ValueError(f"actor {field} is required")
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "role", _value(self.role))
        object.__setattr__(self, "country", _value(self.country))

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=user.id, role=user.role, country=user.country)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self):
        return self.allowed


ALLOW = Decision(True)
DENY_INSUFFICIENT_PERMISSION = Decision(False, DenyReason.INSUFFICIENT_PERMISSION)


class AccessPolicy:
    def __init__(self, catalog: PermissionCatalog = None):
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    def authorize(self, actor: Actor, action) -> Decision:
        if self.catalog.has_permission(actor.role, action):
            return ALLOW
        return DENY_INSUFFICIENT_PERMISSION

    def require(self, actor: Actor, action) -> None:
        if not self.authorize(actor, action):
            raise InsufficientPermission()

    def scope_filter(self, actor: Actor) -> Dict[str, str]:
        """Predicate to merge into queries on partitioned collections."""
        if self.catalog.is_unrestricted(actor.role):
            return {}
        return {"country": actor.country}

    def can_access_partition(self, actor: Actor, country) -> bool:
        if self.catalog.is_unrestricted(actor.role):
            return True
        return actor.country == _value(country)

    def ensure_partition(self, actor: Actor, country, message: Optional[str] = None) -> None:
        # Records fetched by id never went through scope_filter.
        if not self.can_access_partition(actor, country):
            raise OutOfPartition(message)


DEFAULT_POLICY = AccessPolicy()
