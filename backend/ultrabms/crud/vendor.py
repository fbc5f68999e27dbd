from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.vendor import Vendor

UPDATABLE_FIELDS = frozenset({"company_name", "email", "service_category", "is_active"})


class VendorRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, vendor_id: uuid.UUID) -> Vendor | None:
        return await self.session.get(Vendor, vendor_id)

    async def list(self, limit: int, offset: int) -> list[Vendor]:
        result = await self.session.execute(
            select(Vendor).order_by(Vendor.company_name).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def create(self, data: dict[str, Any]) -> Vendor:
        vendor = Vendor(**data)
        self.session.add(vendor)
        await self.session.commit()
        await self.session.refresh(vendor)
        return vendor

    async def update(self, vendor_id: uuid.UUID, changes: dict[str, Any]) -> Vendor | None:
        vendor = await self.session.get(Vendor, vendor_id)
        if vendor is None:
            return None
        for field, value in changes.items():
            if field in UPDATABLE_FIELDS:
                setattr(vendor, field, value)
        await self.session.commit()
        await self.session.refresh(vendor)
        return vendor

    async def add_rating(self, vendor_id: uuid.UUID, score: int) -> Vendor | None:
        vendor = await self.session.get(Vendor, vendor_id)
        if vendor is None:
            return None
        count = vendor.rating_count or 0
        current = Decimal(vendor.rating or 0)
        new_rating = (current * count + score) / (count + 1)
        vendor.rating = new_rating.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        vendor.rating_count = count + 1
        await self.session.commit()
        await self.session.refresh(vendor)
        return vendor

    async def delete(self, vendor_id: uuid.UUID) -> bool:
        vendor = await self.session.get(Vendor, vendor_id)
        if vendor is None:
            return False
        await self.session.delete(vendor)
        await self.session.commit()
        return True
