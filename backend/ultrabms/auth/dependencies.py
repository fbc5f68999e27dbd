"""
HTTP enforcement - FastAPI dependencies that gate a route before its body runs.

    @router.get("/{tenant_id}")
    async def get_tenant(
        auth: AuthorizationContext = Depends(
            require(Permission("tenant:read") | Permission("tenant:read:own"), target=tenant_target)
        ),
    ): ...

Order of checks:
- principal (401 if missing)
- requirement without target (403 if the role lacks it)
- target loaded and requirement re-checked against it (404, then 403)

Denials are audited best-effort. Clients only ever see the permission that
was required, never whether the role or the scope check failed.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from fastapi import Depends, Request

from ..dependencies import get_audit_service, get_authorization_gate, get_current_principal
from ..errors import InsufficientPermission, ScopeViolation
from ..services.audit_service import AuditService
from .decision import Decision, DenyReason
from .gate import AuthorizationGate
from .principal import Principal, ResourceRef
from .requirements import Requirement, as_requirement, is_role_description
from .scope import ScopeFilter, scope_filter

logger = logging.getLogger("ultrabms.rbac")

T = TypeVar("T")

TargetLoader = Callable[[], Awaitable[ResourceRef]]


@dataclass(frozen=True)
class AuthorizationContext:
    principal: Principal
    decision: Decision
    gate: AuthorizationGate

    @property
    def scope_filter(self) -> ScopeFilter:
        return scope_filter(self.principal, self.decision.scope)

    def filter(self, rows: Iterable[T], to_ref: Callable[[T], ResourceRef]) -> list[T]:
        return self.gate.filter(self.principal, self.decision, rows, to_ref)


async def _record_denial(
    audit: AuditService,
    request: Request,
    principal: Principal,
    decision: Decision,
    target: ResourceRef | None,
) -> None:
    try:
        await audit.log_permission_denied(
            principal,
            decision,
            request_method=request.method,
            request_path=request.url.path,
            target_id=str(target.id) if target is not None and target.id else None,
            request_id=getattr(request.state, "request_id", None),
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    except Exception:
        # The 403 is still returned when the audit write fails
        logger.exception("Failed to record permission denial for %s", decision.permission)


def _denial_error(decision: Decision, principal: Principal) -> Exception:
    # Role-only requirements have no permission key to show
    shown = None if is_role_description(decision.permission) else decision.permission
    if decision.reason is DenyReason.SCOPE_VIOLATION:
        return ScopeViolation(shown, principal.user_id)
    return InsufficientPermission(shown, principal.user_id)


async def enforce(
    request: Request,
    principal: Principal,
    gate: AuthorizationGate,
    audit: AuditService,
    requirement: Requirement,
    load_target: TargetLoader | None = None,
) -> AuthorizationContext:
    decision = gate.check(principal, requirement)
    target = None
    if decision.allowed and load_target is not None:
        target = await load_target()
        decision = gate.check(principal, requirement, target)

    if not decision.allowed:
        await _record_denial(audit, request, principal, decision, target)
        raise _denial_error(decision, principal)

    return AuthorizationContext(principal=principal, decision=decision, gate=gate)


def require(
    requirement: Requirement | str,
    target: Callable[..., TargetLoader] | None = None,
) -> Callable:
    """Build a dependency enforcing ``requirement``.

    ``target`` is itself a dependency returning a zero-argument loader for
    the protected entity, so the entity is only fetched once the role check
    has passed.

    Raises:
        ConfigurationError: If the requirement names an undeclared permission
    """
    resolved = as_requirement(requirement)

    if target is None:

        async def dependency(
            request: Request,
            principal: Principal = Depends(get_current_principal),
            gate: AuthorizationGate = Depends(get_authorization_gate),
            audit: AuditService = Depends(get_audit_service),
        ) -> AuthorizationContext:
            return await enforce(request, principal, gate, audit, resolved)

    else:

        async def dependency(
            request: Request,
            principal: Principal = Depends(get_current_principal),
            gate: AuthorizationGate = Depends(get_authorization_gate),
            audit: AuditService = Depends(get_audit_service),
            load_target: TargetLoader = Depends(target),
        ) -> AuthorizationContext:
            return await enforce(request, principal, gate, audit, resolved, load_target)

    return dependency
