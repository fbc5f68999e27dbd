"""
Role-Permission Matrix - fixed lookup from role to granted permissions.

The grant table is deployed configuration: it is built once at startup by
``build_default_matrix()``, validated against the catalog, and then shared
read-only by every request. There is no inheritance between roles apart from
SUPER_ADMIN, which holds every declared permission.

A grant maps a permission key to the scope under which the role holds it.
Most grants are ``Scope.ALL``. A restricted grant such as TENANT's
``workorder:read`` at ``Scope.OWN`` means the role holds the permission, but
only for rows it owns.
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final

from ..errors import ConfigurationError
from .catalog import ALL_PERMISSIONS, Scope, validate_permission


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    PROPERTY_MANAGER = "PROPERTY_MANAGER"
    MAINTENANCE_SUPERVISOR = "MAINTENANCE_SUPERVISOR"
    FINANCE_MANAGER = "FINANCE_MANAGER"
    TENANT = "TENANT"
    VENDOR = "VENDOR"


RoleGrants = Mapping[str, Scope]


def _all(*permissions: str) -> dict[str, Scope]:
    return {permission: Scope.ALL for permission in permissions}


DEFAULT_ROLE_GRANTS: Final[dict[Role, dict[str, Scope]]] = {
    Role.PROPERTY_MANAGER: {
        "property:update": Scope.ASSIGNED,
        **_all(
            "property:read:assigned",
            "tenant:create",
            "tenant:read",
            "tenant:update",
            "workorder:create",
            "workorder:read",
            "workorder:update",
            "workorder:assign",
            "vendor:read",
            "amenity:manage",
        ),
        # Financial visibility is limited to the manager's own portfolio
        "financial:read": Scope.ASSIGNED,
        "financial:report": Scope.ASSIGNED,
    },
    Role.MAINTENANCE_SUPERVISOR: _all(
        "workorder:read",
        "workorder:update",
        "workorder:assign",
        "vendor:read",
        "vendor:update",
        "vendor:performance",
    ),
    Role.FINANCE_MANAGER: _all(
        "property:read:all",
        "tenant:read",
        "financial:read",
        "financial:create",
        "financial:update",
        "financial:report",
        "financial:pdc",
        "payment:process",
        "payment:refund",
    ),
    Role.TENANT: {
        **_all(
            "tenant:read:own",
            "workorder:create",
            "amenity:book",
            "payment:make",
        ),
        "workorder:read": Scope.OWN,
    },
    Role.VENDOR: {
        "workorder:read": Scope.ASSIGNED,
        "workorder:update": Scope.ASSIGNED,
    },
}


class RolePermissionMatrix:
    """Immutable role to permission table.

    Raises ConfigurationError at construction if any grant references an
    undeclared permission or if a non-superuser role has no grants.
    """

    __slots__ = ("_grants",)

    def __init__(self, grants: Mapping[Role, RoleGrants]):
        errors: list[str] = []
        frozen: dict[Role, Mapping[str, Scope]] = {}

        for role in Role:
            if role is Role.SUPER_ADMIN:
                continue
            if role not in grants:
                errors.append(f"Role '{role.value}' has no declared grants")
                continue
            role_grants = grants[role]
            for permission, scope in role_grants.items():
                try:
                    validate_permission(permission)
                except ConfigurationError as exc:
                    errors.append(f"Role '{role.value}': {exc}")
                if not isinstance(scope, Scope):
                    errors.append(
                        f"Role '{role.value}': grant scope for '{permission}' must be a Scope"
                    )
            frozen[role] = MappingProxyType(dict(role_grants))

        for role in grants:
            if not isinstance(role, Role):
                errors.append(f"Unknown role in grants: {role!r}")
            elif role is Role.SUPER_ADMIN:
                errors.append("SUPER_ADMIN grants are implicit and must not be declared")

        if errors:
            raise ConfigurationError(
                "Role-permission matrix validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )

        object.__setattr__(self, "_grants", MappingProxyType(frozen))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("RolePermissionMatrix is immutable")

    @staticmethod
    def _require_role(role: Role) -> Role:
        if not isinstance(role, Role):
            try:
                return Role(role)
            except ValueError:
                raise ConfigurationError(f"Unknown role '{role}'") from None
        return role

    def grant_scope(self, role: Role, permission: str) -> Scope | None:
        """Scope under which ``role`` holds ``permission``, or None if it does not."""
        role = self._require_role(role)
        validate_permission(permission)
        if role is Role.SUPER_ADMIN:
            return Scope.ALL
        return self._grants[role].get(permission)

    def has_permission(self, role: Role, permission: str) -> bool:
        return self.grant_scope(role, permission) is not None

    def has_any_permission(self, role: Role, *permissions: str) -> bool:
        return any(self.has_permission(role, p) for p in permissions)

    def has_all_permissions(self, role: Role, *permissions: str) -> bool:
        return all(self.has_permission(role, p) for p in permissions)

    def permissions_for(self, role: Role) -> frozenset[str]:
        role = self._require_role(role)
        if role is Role.SUPER_ADMIN:
            return ALL_PERMISSIONS
        return frozenset(self._grants[role])

    def permission_strings(self, role: Role) -> list[str]:
        return sorted(self.permissions_for(role))


def build_default_matrix() -> RolePermissionMatrix:
    return RolePermissionMatrix(DEFAULT_ROLE_GRANTS)
