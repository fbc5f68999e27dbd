from datetime import datetime
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..auth.dependencies import AuthorizationContext, require
from ..auth.matrix import Role
from ..auth.requirements import Permission
from ..crud.audit_log import AuditLogRepository
from ..dependencies import get_audit_log_repository
from ..schemas.audit_log import AuditLogRead

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("/denials", response_model=list[AuditLogRead])
async def list_permission_denials(
    actor_id: UUID | None = None,
    role: Role | None = None,
    permission: str | None = None,
    reason: Literal["INSUFFICIENT_PERMISSION", "SCOPE_VIOLATION"] | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: AuthorizationContext = Depends(require(Permission("system:admin"))),
    audit_repo: AuditLogRepository = Depends(get_audit_log_repository),
) -> list[AuditLogRead]:
    """Permission denials, newest first. Only here is the deny reason visible."""
    rows = await audit_repo.list_denials(
        actor_id=actor_id,
        actor_role=role.value if role is not None else None,
        permission=permission,
        reason=reason,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
        offset=offset,
    )
    return [AuditLogRead.model_validate(row) for row in rows]
