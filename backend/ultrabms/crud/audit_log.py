import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.audit_log import AuditLog

PERMISSION_DENIED_ACTION = "permission_denied"


def _denial_conditions(
    actor_id: uuid.UUID | None,
    actor_role: str | None,
    permission: str | None,
    reason: str | None,
    from_date: datetime | None,
    to_date: datetime | None,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [AuditLog.action == PERMISSION_DENIED_ACTION]
    if actor_id is not None:
        conditions.append(AuditLog.actor_id == actor_id)
    if actor_role is not None:
        conditions.append(AuditLog.actor_role == actor_role)
    if permission is not None:
        # Denials are keyed by the permission that was required
        conditions.append(AuditLog.entity_type == "permission")
        conditions.append(AuditLog.entity_id == permission)
    if reason is not None:
        conditions.append(AuditLog.reason == reason)
    if from_date is not None:
        conditions.append(AuditLog.created_at >= from_date)
    if to_date is not None:
        conditions.append(AuditLog.created_at <= to_date)
    return conditions


class AuditLogRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        actor_id: uuid.UUID | None,
        actor_role: str | None,
        action: str,
        entity_type: str,
        entity_id: str,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
        request_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLog:
        entry = AuditLog(
            actor_id=actor_id,
            actor_role=actor_role,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            reason=reason,
            details=details,
            request_id=request_id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def list_denials(
        self,
        actor_id: uuid.UUID | None = None,
        actor_role: str | None = None,
        permission: str | None = None,
        reason: str | None = None,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[AuditLog]:
        """Permission denials, newest first."""
        conditions = _denial_conditions(
            actor_id, actor_role, permission, reason, from_date, to_date
        )
        result = await self.session.execute(
            select(AuditLog)
            .where(*conditions)
            .order_by(AuditLog.created_at.desc(), AuditLog.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())
