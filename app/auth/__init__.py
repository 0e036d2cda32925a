from .permissions import (
    Action,
    Country,
    PermissionCatalog,
    Role,
    has_permission,
    permissions_for,
)
from .policy import (
    AccessDenied,
    AccessPolicy,
    Actor,
    Decision,
    DenyReason,
    InsufficientPermission,
    OutOfPartition,
)

__all__ = [
    'Action',
    'Country',
    'PermissionCatalog',
    'Role',
    'has_permission',
    'permissions_for',
    'AccessDenied',
    'AccessPolicy',
    'Actor',
    'Decision',
    'DenyReason',
    'InsufficientPermission',
    'OutOfPartition',
]
