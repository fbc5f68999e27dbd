"""
Permission Catalog - the closed set of permission keys the system recognizes.

A permission key has the shape ``resource:action[:scope]``, for example
``workorder:read`` or ``tenant:read:own``. Keys are declared here and only
here; nothing creates permissions at runtime.

Wildcards ("user:*", "financial:*") are never valid keys. A role that should
hold every action of a resource lists those actions explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..errors import ConfigurationError


class Scope(str, Enum):
    """Data-level qualifier restricting a permission to a subset of rows."""

    OWN = "own"
    ASSIGNED = "assigned"
    ALL = "all"


class Resource(str, Enum):
    USER = "user"
    PROPERTY = "property"
    TENANT = "tenant"
    WORKORDER = "workorder"
    FINANCIAL = "financial"
    VENDOR = "vendor"
    SYSTEM = "system"
    AMENITY = "amenity"
    PAYMENT = "payment"


@dataclass(frozen=True)
class PermissionKey:
    resource: Resource
    action: str
    scope: Scope | None = None

    @property
    def base(self) -> str:
        return f"{self.resource.value}:{self.action}"

    def __str__(self) -> str:
        if self.scope is None:
            return self.base
        return f"{self.base}:{self.scope.value}"


# ============================================================================
# DECLARED PERMISSIONS
# ============================================================================

USER_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "user:create",
    "user:read",
    "user:update",
    "user:delete",
    "user:manage:all",
})

PROPERTY_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "property:create",
    "property:read",
    "property:update",
    "property:delete",
    "property:read:assigned",
    "property:read:all",
})

TENANT_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "tenant:create",
    "tenant:read",
    "tenant:update",
    "tenant:delete",
    "tenant:read:own",
})

WORKORDER_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "workorder:create",
    "workorder:read",
    "workorder:update",
    "workorder:assign",
    "workorder:approve",
    "workorder:delete",
})

FINANCIAL_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "financial:read",
    "financial:create",
    "financial:update",
    "financial:delete",
    "financial:report",
    # Post-dated cheque registration and withdrawal
    "financial:pdc",
})

VENDOR_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "vendor:create",
    "vendor:read",
    "vendor:update",
    "vendor:delete",
    "vendor:performance",
})

SYSTEM_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "system:config",
    "system:admin",
})

AMENITY_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "amenity:book",
    "amenity:manage",
})

PAYMENT_PERMISSIONS: Final[frozenset[str]] = frozenset({
    "payment:make",
    "payment:process",
    "payment:refund",
})

PERMISSIONS_BY_RESOURCE: Final[dict[Resource, frozenset[str]]] = {
    Resource.USER: USER_PERMISSIONS,
    Resource.PROPERTY: PROPERTY_PERMISSIONS,
    Resource.TENANT: TENANT_PERMISSIONS,
    Resource.WORKORDER: WORKORDER_PERMISSIONS,
    Resource.FINANCIAL: FINANCIAL_PERMISSIONS,
    Resource.VENDOR: VENDOR_PERMISSIONS,
    Resource.SYSTEM: SYSTEM_PERMISSIONS,
    Resource.AMENITY: AMENITY_PERMISSIONS,
    Resource.PAYMENT: PAYMENT_PERMISSIONS,
}

ALL_PERMISSIONS: Final[frozenset[str]] = frozenset().union(*PERMISSIONS_BY_RESOURCE.values())


# ============================================================================
# LOOKUPS AND VALIDATION
# ============================================================================

def all_permissions() -> frozenset[str]:
    return ALL_PERMISSIONS


def permissions_for_resource(resource: Resource | str) -> frozenset[str]:
    try:
        return PERMISSIONS_BY_RESOURCE[Resource(resource)]
    except ValueError:
        raise ConfigurationError(f"Unknown resource '{resource}'") from None


def parse_permission(key: str) -> PermissionKey:
    """
    Split a permission key into resource, action and optional scope.

    Raises:
        ConfigurationError: If the key is malformed, contains a wildcard or
            names an unknown resource or scope
    """
    if not isinstance(key, str) or not key:
        raise ConfigurationError(f"Permission key must be a non-empty string, got {key!r}")
    if "*" in key:
        raise ConfigurationError(f"Wildcard permission '{key}' is not allowed")

    parts = key.split(":")
    if len(parts) not in (2, 3) or not all(parts):
        raise ConfigurationError(
            f"Malformed permission '{key}', expected resource:action[:scope]"
        )

    try:
        resource = Resource(parts[0])
    except ValueError:
        raise ConfigurationError(f"Unknown resource in permission '{key}'") from None

    scope = None
    if len(parts) == 3:
        try:
            scope = Scope(parts[2])
        except ValueError:
            raise ConfigurationError(f"Unknown scope in permission '{key}'") from None

    return PermissionKey(resource=resource, action=parts[1], scope=scope)


def validate_permission(key: str) -> PermissionKey:
    """
    Ensure a permission key is declared in the catalog.

    Raises:
        ConfigurationError: If the key is not declared
    """
    parsed = parse_permission(key)
    if key not in ALL_PERMISSIONS:
        raise ConfigurationError(f"Undeclared permission '{key}'")
    return parsed
