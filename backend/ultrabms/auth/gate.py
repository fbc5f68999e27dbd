"""
Authorization Gate - the single entry point consulted before business logic.

The gate is a pure function of (principal, requirement, target) to a
Decision. It holds only the read-only role-permission matrix, so one
instance is shared by every request without locking.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from .catalog import Scope, validate_permission
from .decision import Decision, DenyReason
from .matrix import RolePermissionMatrix
from .principal import Principal, ResourceRef
from .requirements import Requirement, as_requirement
from .scope import effective_scope, evaluate_scope, filter_by_scope

logger = logging.getLogger("ultrabms.rbac")

T = TypeVar("T")


class AuthorizationGate:
    __slots__ = ("matrix",)

    def __init__(self, matrix: RolePermissionMatrix):
        self.matrix = matrix

    def decide(
        self,
        principal: Principal,
        permission: str,
        target: ResourceRef | None = None,
    ) -> Decision:
        """Evaluate one permission without logging.

        Raises:
            ConfigurationError: If the permission is not declared
        """
        validate_permission(permission)

        scope = effective_scope(self.matrix, principal.role, permission)
        if scope is None:
            return Decision.deny(permission, DenyReason.INSUFFICIENT_PERMISSION)

        if target is not None and scope is not Scope.ALL:
            if not evaluate_scope(principal, scope, target):
                return Decision.deny(permission, DenyReason.SCOPE_VIOLATION)

        return Decision.allow(permission, scope)

    def authorize(
        self,
        principal: Principal,
        permission: str,
        target: ResourceRef | None = None,
    ) -> Decision:
        decision = self.decide(principal, permission, target)
        if not decision.allowed:
            self._log_deny(principal, decision, target)
        return decision

    def check(
        self,
        principal: Principal,
        requirement: Requirement | str,
        target: ResourceRef | None = None,
    ) -> Decision:
        decision = as_requirement(requirement).evaluate(self, principal, target)
        if not decision.allowed:
            self._log_deny(principal, decision, target)
        return decision

    def filter(
        self,
        principal: Principal,
        decision: Decision,
        rows: Iterable[T],
        to_ref: Callable[[T], ResourceRef],
    ) -> list[T]:
        """Apply an allow decision's scope to a result set."""
        if not decision.allowed:
            return []
        if decision.scope is None:
            return list(rows)
        return filter_by_scope(principal, decision.scope, rows, to_ref)

    @staticmethod
    def _log_deny(
        principal: Principal,
        decision: Decision,
        target: ResourceRef | None,
    ) -> None:
        logger.warning(
            "Authorization denied principal=%s role=%s permission=%s reason=%s target=%s",
            principal.user_id,
            principal.role.value,
            decision.permission,
            decision.reason.value if decision.reason else "unknown",
            f"{target.resource.value}:{target.id}" if target is not None else "n/a",
        )
