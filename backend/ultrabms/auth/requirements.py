"""
Composite authorization requirements.

Requirements are plain typed objects combined with ``|`` (any of) and ``&``
(all of). They are validated when built, so a route declared with an
undeclared permission fails at import time rather than on first request.

    (Permission("tenant:read") | Permission("tenant:update"))
        & HasRole(Role.PROPERTY_MANAGER, Role.SUPER_ADMIN)
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from .catalog import Scope, validate_permission
from .decision import Decision, DenyReason
from .matrix import Role
from .principal import Principal, ResourceRef

ROLE_PREFIX = "role:"

if TYPE_CHECKING:
    from .gate import AuthorizationGate


class Requirement:
    def evaluate(
        self,
        gate: AuthorizationGate,
        principal: Principal,
        target: ResourceRef | None,
    ) -> Decision:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def __or__(self, other: "Requirement") -> "AnyOf":
        return AnyOf(self, other)

    def __and__(self, other: "Requirement") -> "AllOf":
        return AllOf(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


class Permission(Requirement):
    __slots__ = ("key",)

    def __init__(self, key: str):
        validate_permission(key)
        self.key = key

    def evaluate(self, gate, principal, target):
        return gate.decide(principal, self.key, target)

    def describe(self) -> str:
        return self.key


class HasRole(Requirement):
    __slots__ = ("roles",)

    def __init__(self, *roles: Role):
        if not roles:
            raise ValueError("HasRole requires at least one role")
        self.roles = frozenset(Role(role) for role in roles)

    def evaluate(self, gate, principal, target):
        if principal.role in self.roles:
            return Decision.allow(self.describe())
        return Decision.deny(self.describe(), DenyReason.INSUFFICIENT_PERMISSION)

    def describe(self) -> str:
        return ROLE_PREFIX + "|".join(sorted(role.value for role in self.roles))


def is_role_description(permission: str) -> bool:
    return permission.startswith(ROLE_PREFIX)


class AnyOf(Requirement):
    """Logical OR. The first allowing branch wins."""

    __slots__ = ("branches",)

    def __init__(self, *branches: Requirement):
        if not branches:
            raise ValueError("AnyOf requires at least one requirement")
        flat: list[Requirement] = []
        for branch in branches:
            flat.extend(branch.branches if isinstance(branch, AnyOf) else (branch,))
        self.branches = tuple(flat)

    def evaluate(self, gate, principal, target):
        reason = DenyReason.INSUFFICIENT_PERMISSION
        for branch in self.branches:
            decision = branch.evaluate(gate, principal, target)
            if decision.allowed:
                return decision
            if decision.reason is DenyReason.SCOPE_VIOLATION:
                reason = DenyReason.SCOPE_VIOLATION
        return Decision.deny(self.describe(), reason)

    def describe(self) -> str:
        return " OR ".join(branch.describe() for branch in self.branches)


class AllOf(Requirement):
    """Logical AND. The first denying branch is returned as-is."""

    __slots__ = ("branches",)

    def __init__(self, *branches: Requirement):
        if not branches:
            raise ValueError("AllOf requires at least one requirement")
        flat: list[Requirement] = []
        for branch in branches:
            flat.extend(branch.branches if isinstance(branch, AllOf) else (branch,))
        self.branches = tuple(flat)

    def evaluate(self, gate, principal, target):
        allowed: list[Decision] = []
        for branch in self.branches:
            decision = branch.evaluate(gate, principal, target)
            if not decision.allowed:
                if isinstance(branch, HasRole) and self._permission_branches():
                    # A missing role is reported as the permission it guards
                    return Decision.deny(self._describe_permissions(), decision.reason)
                return decision
            allowed.append(decision)
        # The narrowest branch decides which rows a list may return
        for decision in allowed:
            if decision.scope is not None and decision.scope is not Scope.ALL:
                return decision
        for decision in allowed:
            if decision.scope is not None:
                return decision
        return allowed[-1]

    def _permission_branches(self) -> list[Requirement]:
        return [branch for branch in self.branches if not isinstance(branch, HasRole)]

    def _describe_permissions(self) -> str:
        branches = self._permission_branches()
        if len(branches) == 1:
            return branches[0].describe()
        return " AND ".join(f"({branch.describe()})" for branch in branches)

    def describe(self) -> str:
        return " AND ".join(f"({branch.describe()})" for branch in self.branches)


def as_requirement(value: Requirement | str) -> Requirement:
    if isinstance(value, Requirement):
        return value
    return Permission(value)
