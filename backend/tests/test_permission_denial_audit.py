"""
Permission denial enforcement and audit.

Verifies that:
1. Denials raise the right 403 error and are audited with the precise reason
2. Allowed checks are not audited
3. Audit failures never turn a 403 into something else
"""
import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request, status

from ultrabms.auth.decision import Decision, DenyReason
from ultrabms.auth.dependencies import AuthorizationContext, require
from ultrabms.auth.matrix import Role
from ultrabms.auth.principal import ResourceRef
from ultrabms.auth.requirements import Permission
from ultrabms.errors import InsufficientPermission, ScopeViolation
from ultrabms.services.audit_service import AuditService


def _request(path: str = "/api/v1/tenants", method: str = "GET") -> MagicMock:
    request = MagicMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state.request_id = "req-123"
    request.client.host = "10.0.0.7"
    request.headers = {"user-agent": "pytest"}
    return request


def _audit() -> MagicMock:
    audit = MagicMock(spec=AuditService)
    audit.log_permission_denied = AsyncMock()
    return audit


class TestRequireDependency:
    @pytest.mark.anyio
    async def test_missing_grant_raises_and_audits(self, gate, make_principal):
        principal = make_principal(Role.VENDOR)
        audit = _audit()
        dependency = require(Permission("tenant:read"))

        with pytest.raises(InsufficientPermission) as exc_info:
            await dependency(request=_request(), principal=principal, gate=gate, audit=audit)

        assert exc_info.value.status_code == status.HTTP_403_FORBIDDEN
        assert exc_info.value.message == "Insufficient permissions: tenant:read"

        audit.log_permission_denied.assert_awaited_once()
        args, kwargs = audit.log_permission_denied.call_args
        assert args[0] is principal
        assert args[1].reason is DenyReason.INSUFFICIENT_PERMISSION
        assert kwargs["request_method"] == "GET"
        assert kwargs["request_path"] == "/api/v1/tenants"
        assert kwargs["request_id"] == "req-123"
        assert kwargs["ip_address"] == "10.0.0.7"
        assert kwargs["user_agent"] == "pytest"
        assert kwargs["target_id"] is None

    @pytest.mark.anyio
    async def test_scope_mismatch_raises_scope_violation_with_same_message(self, gate, make_principal):
        principal = make_principal(Role.TENANT)
        tenant_id = uuid.uuid4()
        audit = _audit()

        async def load():
            return ResourceRef.for_tenant(tenant_id, owner_id=uuid.uuid4())

        dependency = require(Permission("tenant:read:own"), target=lambda: load)

        with pytest.raises(ScopeViolation) as exc_info:
            await dependency(
                request=_request(f"/api/v1/tenants/{tenant_id}"),
                principal=principal,
                gate=gate,
                audit=audit,
                load_target=load,
            )

        assert exc_info.value.message == "Insufficient permissions: tenant:read:own"
        decision = audit.log_permission_denied.call_args.args[1]
        assert decision.reason is DenyReason.SCOPE_VIOLATION
        assert audit.log_permission_denied.call_args.kwargs["target_id"] == str(tenant_id)

    @pytest.mark.anyio
    async def test_target_not_loaded_when_role_lacks_permission(self, gate, make_principal):
        load = AsyncMock()
        dependency = require(Permission("property:delete"), target=lambda: load)

        with pytest.raises(InsufficientPermission):
            await dependency(
                request=_request(),
                principal=make_principal(Role.TENANT),
                gate=gate,
                audit=_audit(),
                load_target=load,
            )

        load.assert_not_awaited()

    @pytest.mark.anyio
    async def test_allowed_check_returns_context_without_audit(self, gate, make_principal):
        audit = _audit()
        manager = make_principal(Role.PROPERTY_MANAGER)
        dependency = require("financial:read")

        context = await dependency(request=_request(), principal=manager, gate=gate, audit=audit)

        assert isinstance(context, AuthorizationContext)
        assert context.decision.allowed
        assert context.scope_filter.property_ids == frozenset()
        audit.log_permission_denied.assert_not_awaited()

    @pytest.mark.anyio
    async def test_audit_failure_still_denies(self, gate, make_principal, caplog):
        audit = _audit()
        audit.log_permission_denied.side_effect = RuntimeError("database unavailable")
        dependency = require(Permission("system:config"))

        with pytest.raises(InsufficientPermission):
            await dependency(
                request=_request(), principal=make_principal(Role.TENANT), gate=gate, audit=audit
            )

        assert "Failed to record permission denial" in caplog.text


class TestAuditService:
    @pytest.mark.anyio
    async def test_denial_row_records_reason_and_request(self, make_principal):
        principal = make_principal(Role.TENANT)
        decision = Decision.deny("tenant:read:own", DenyReason.SCOPE_VIOLATION)

        with patch("ultrabms.services.audit_service.AuditLogRepository") as MockAuditRepo:
            repo = MockAuditRepo.return_value
            repo.create = AsyncMock()

            await AuditService(MagicMock()).log_permission_denied(
                principal,
                decision,
                request_method="GET",
                request_path="/api/v1/tenants/abc",
                target_id="abc",
            )

        kwargs = repo.create.call_args.kwargs
        assert kwargs["actor_id"] == principal.user_id
        assert kwargs["actor_role"] == "TENANT"
        assert kwargs["action"] == "permission_denied"
        assert kwargs["entity_type"] == "permission"
        assert kwargs["entity_id"] == "tenant:read:own"
        assert kwargs["reason"] == "SCOPE_VIOLATION"
        assert kwargs["details"] == {
            "request_method": "GET",
            "request_path": "/api/v1/tenants/abc",
            "target_id": "abc",
        }

    @pytest.mark.anyio
    async def test_allowed_decision_cannot_be_audited_as_denial(self, make_principal):
        with patch("ultrabms.services.audit_service.AuditLogRepository"):
            service = AuditService(MagicMock())

        with pytest.raises(ValueError):
            await service.log_permission_denied(
                make_principal(Role.TENANT),
                Decision.allow("amenity:book"),
                request_method="POST",
                request_path="/api/v1/amenities",
            )
