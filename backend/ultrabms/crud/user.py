from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.property import Property
from ..models.tenant import Tenant
from ..models.user import User
from ..models.vendor import Vendor


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def list(self, limit: int, offset: int) -> list[User]:
        result = await self.session.execute(
            select(User).order_by(User.created_at.desc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def assigned_property_ids(self, user_id: uuid.UUID) -> frozenset[uuid.UUID]:
        result = await self.session.execute(
            select(Property.id).where(Property.manager_id == user_id)
        )
        return frozenset(result.scalars().all())

    async def tenant_id_for(self, user_id: uuid.UUID) -> uuid.UUID | None:
        result = await self.session.execute(
            select(Tenant.id).where(Tenant.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def vendor_id_for(self, user_id: uuid.UUID) -> uuid.UUID | None:
        result = await self.session.execute(
            select(Vendor.id).where(Vendor.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def update_role(self, user_id: uuid.UUID, role: str) -> User | None:
        user = await self.session.get(User, user_id)
        if user is None:
            return None
        user.role = role
        await self.session.commit()
        await self.session.refresh(user)
        return user
