from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.scope import ScopeFilter
from ..models.tenant import Tenant
from ._scoping import apply_scope

UPDATABLE_FIELDS = frozenset(
    {"first_name", "last_name", "email", "phone", "lease_start", "lease_end", "property_id"}
)


class TenantRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, tenant_id: uuid.UUID) -> Tenant | None:
        return await self.session.get(Tenant, tenant_id)

    async def list(self, scope: ScopeFilter, limit: int, offset: int) -> list[Tenant]:
        query = apply_scope(
            select(Tenant),
            scope,
            owner_column=Tenant.user_id,
            property_column=Tenant.property_id,
        )
        result = await self.session.execute(
            query.order_by(Tenant.last_name, Tenant.first_name).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def create(self, data: dict[str, Any]) -> Tenant:
        tenant = Tenant(**data)
        self.session.add(tenant)
        await self.session.commit()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant_id: uuid.UUID, changes: dict[str, Any]) -> Tenant | None:
        tenant = await self.session.get(Tenant, tenant_id)
        if tenant is None:
            return None
        for field, value in changes.items():
            if field in UPDATABLE_FIELDS:
                setattr(tenant, field, value)
        await self.session.commit()
        await self.session.refresh(tenant)
        return tenant

    async def delete(self, tenant_id: uuid.UUID) -> bool:
        tenant = await self.session.get(Tenant, tenant_id)
        if tenant is None:
            return False
        await self.session.delete(tenant)
        await self.session.commit()
        return True
