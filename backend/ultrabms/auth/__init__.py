from .catalog import Resource, Scope, all_permissions
from .decision import Decision, DenyReason
from .gate import AuthorizationGate
from .matrix import Role, RolePermissionMatrix, build_default_matrix
from .principal import Principal, ResourceRef
from .requirements import AllOf, AnyOf, HasRole, Permission, Requirement

__all__ = [
    "AllOf",
    "AnyOf",
    "AuthorizationGate",
    "Decision",
    "DenyReason",
    "HasRole",
    "Permission",
    "Principal",
    "Requirement",
    "Resource",
    "ResourceRef",
    "Role",
    "RolePermissionMatrix",
    "Scope",
    "all_permissions",
    "build_default_matrix",
]
