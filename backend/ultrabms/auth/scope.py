"""
Scope Evaluator - resolves data-level scoping against a concrete target.

Used two ways:
- as a gate, when a single target entity is known (detail/update endpoints)
- as a filter, when there is no single target (list endpoints), in which
  case every returned row must satisfy the predicate on its own
"""
from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from .catalog import Scope, parse_permission
from .matrix import Role, RolePermissionMatrix
from .principal import Principal, ResourceRef

T = TypeVar("T")


def effective_scope(
    matrix: RolePermissionMatrix, role: Role, permission: str
) -> Scope | None:
    """Scope a check must satisfy, or None if the role lacks the permission.

    An explicit scope in the key (``tenant:read:own``) takes precedence over
    the scope of the role's grant.
    """
    grant = matrix.grant_scope(role, permission)
    if grant is None:
        return None
    explicit = parse_permission(permission).scope
    return explicit if explicit is not None else grant


def _matches_assignment(principal: Principal, target: ResourceRef) -> bool:
    if principal.vendor_id is not None and target.assigned_vendor_id is not None:
        return target.assigned_vendor_id == principal.vendor_id
    if target.property_id is None:
        return False
    return target.property_id in principal.assigned_property_ids


def evaluate_scope(principal: Principal, scope: Scope, target: ResourceRef) -> bool:
    if scope is Scope.ALL:
        return True
    if scope is Scope.OWN:
        return target.owner_id is not None and target.owner_id == principal.user_id
    if scope is Scope.ASSIGNED:
        return _matches_assignment(principal, target)
    return False


@dataclass(frozen=True)
class ScopeFilter:
    """Query-side form of a scope, so repositories can narrow in SQL.

    All fields None means unrestricted.
    """

    owner_id: uuid.UUID | None = None
    property_ids: frozenset[uuid.UUID] | None = None
    assigned_vendor_id: uuid.UUID | None = None

    @property
    def unrestricted(self) -> bool:
        return (
            self.owner_id is None
            and self.property_ids is None
            and self.assigned_vendor_id is None
        )


def scope_filter(principal: Principal, scope: Scope | None) -> ScopeFilter:
    if scope is None or scope is Scope.ALL:
        return ScopeFilter()
    if scope is Scope.OWN:
        return ScopeFilter(owner_id=principal.user_id)
    if principal.vendor_id is not None:
        return ScopeFilter(assigned_vendor_id=principal.vendor_id)
    return ScopeFilter(property_ids=principal.assigned_property_ids)


def filter_by_scope(
    principal: Principal,
    scope: Scope,
    rows: Iterable[T],
    to_ref: Callable[[T], ResourceRef],
) -> list[T]:
    if scope is Scope.ALL:
        return list(rows)
    return [row for row in rows if evaluate_scope(principal, scope, to_ref(row))]
