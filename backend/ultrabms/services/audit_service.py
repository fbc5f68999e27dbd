from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.decision import Decision, DenyReason
from ..auth.principal import Principal
from ..crud.audit_log import PERMISSION_DENIED_ACTION, AuditLogRepository

_AUDIT_REASON = {
    DenyReason.INSUFFICIENT_PERMISSION: "INSUFFICIENT_PERMISSION",
    DenyReason.SCOPE_VIOLATION: "SCOPE_VIOLATION",
}


class AuditService:
    """Records authorization denials.

    The two deny reasons are stored distinctly so audits can tell a missing
    role grant from an ownership or assignment mismatch. Clients never see
    this distinction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.audit_repo = AuditLogRepository(session)

    async def log_permission_denied(
        self,
        principal: Principal,
        decision: Decision,
        *,
        request_method: str,
        request_path: str,
        target_id: str | None = None,
        request_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ):
        if decision.allowed:
            raise ValueError("Cannot audit an allowed decision as a denial")

        return await self.audit_repo.create(
            actor_id=principal.user_id,
            actor_role=principal.role.value,
            action=PERMISSION_DENIED_ACTION,
            entity_type="permission",
            entity_id=decision.permission,
            reason=_AUDIT_REASON[decision.reason] if decision.reason else None,
            details={
                "request_method": request_method,
                "request_path": request_path,
                "target_id": target_id,
            },
            request_id=request_id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
