from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.scope import ScopeFilter
from ..models.property import Property
from ._scoping import apply_scope

UPDATABLE_FIELDS = frozenset({"name", "address", "total_units", "manager_id"})


class PropertyRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, property_id: uuid.UUID) -> Property | None:
        return await self.session.get(Property, property_id)

    async def list(self, scope: ScopeFilter, limit: int, offset: int) -> list[Property]:
        query = apply_scope(select(Property), scope, property_column=Property.id)
        result = await self.session.execute(
            query.order_by(Property.name).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def create(
        self,
        name: str,
        address: str,
        total_units: int,
        manager_id: uuid.UUID | None,
    ) -> Property:
        prop = Property(
            name=name,
            address=address,
            total_units=total_units,
            manager_id=manager_id,
        )
        self.session.add(prop)
        await self.session.commit()
        await self.session.refresh(prop)
        return prop

    async def update(self, property_id: uuid.UUID, changes: dict[str, Any]) -> Property | None:
        prop = await self.session.get(Property, property_id)
        if prop is None:
            return None
        for field, value in changes.items():
            if field in UPDATABLE_FIELDS:
                setattr(prop, field, value)
        await self.session.commit()
        await self.session.refresh(prop)
        return prop

    async def delete(self, property_id: uuid.UUID) -> bool:
        prop = await self.session.get(Property, property_id)
        if prop is None:
            return False
        await self.session.delete(prop)
        await self.session.commit()
        return True
