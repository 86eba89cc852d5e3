"""Role to capability mapping checked against verified token claims."""

from __future__ import annotations

from enum import Enum

from ...errors import PermissionDeniedError
from ...models.domain import Role, TokenClaims


class Permission(str, Enum):
    MANAGE_OWN_FLEET = "fleet:manage_own"
    MANAGE_ANY_FLEET = "fleet:manage_any"
    MANAGE_LOCATIONS = "locations:manage"
    VIEW_LOCATIONS = "locations:view"
    CREATE_SHIPMENTS = "shipments:create"
    VIEW_SHIPMENTS = "shipments:view"
    OPTIMIZE_ROUTES = "routes:optimize"
    VIEW_ROUTES = "routes:view"
    MANAGE_USERS = "users:manage"


_USER = frozenset(
    {
        Permission.MANAGE_OWN_FLEET,
        Permission.VIEW_LOCATIONS,
        Permission.MANAGE_LOCATIONS,
        Permission.CREATE_SHIPMENTS,
        Permission.VIEW_SHIPMENTS,
        Permission.OPTIMIZE_ROUTES,
        Permission.VIEW_ROUTES,
    }
)

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.DRIVER: frozenset({Permission.VIEW_LOCATIONS, Permission.VIEW_SHIPMENTS, Permission.VIEW_ROUTES}),
    Role.USER: _USER,
    Role.MANAGER: _USER | {Permission.MANAGE_ANY_FLEET},
    Role.ADMIN: frozenset(Permission),
}


def permissions_for(role: Role) -> frozenset[Permission]:
    return ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(claims: TokenClaims, permission: Permission) -> bool:
    return permission in permissions_for(claims.role)


def require_permission(claims: TokenClaims, permission: Permission) -> None:
    if not has_permission(claims, permission):
        raise PermissionDeniedError(claims.role.value, permission.value)
