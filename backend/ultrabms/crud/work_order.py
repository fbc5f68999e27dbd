from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.scope import ScopeFilter
from ..models.work_order import WorkOrder, WorkOrderStatus
from ._scoping import apply_scope


class WorkOrderRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, work_order_id: uuid.UUID) -> WorkOrder | None:
        return await self.session.get(WorkOrder, work_order_id)

    async def list(
        self,
        scope: ScopeFilter,
        limit: int,
        offset: int,
        status: str | None = None,
    ) -> list[WorkOrder]:
        query = apply_scope(
            select(WorkOrder),
            scope,
            owner_column=WorkOrder.requested_by,
            property_column=WorkOrder.property_id,
            vendor_column=WorkOrder.assigned_vendor_id,
        )
        if status is not None:
            query = query.where(WorkOrder.status == status)
        result = await self.session.execute(
            query.order_by(WorkOrder.created_at.desc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def create(
        self,
        property_id: uuid.UUID,
        requested_by: uuid.UUID,
        title: str,
        description: str | None,
        priority: str,
    ) -> WorkOrder:
        work_order = WorkOrder(
            property_id=property_id,
            requested_by=requested_by,
            title=title,
            description=description,
            priority=priority,
            status=WorkOrderStatus.OPEN.value,
        )
        self.session.add(work_order)
        await self.session.commit()
        await self.session.refresh(work_order)
        return work_order

    async def set_status(self, work_order_id: uuid.UUID, status: str) -> WorkOrder | None:
        work_order = await self.session.get(WorkOrder, work_order_id)
        if work_order is None:
            return None
        work_order.status = status
        await self.session.commit()
        await self.session.refresh(work_order)
        return work_order

    async def assign(self, work_order_id: uuid.UUID, vendor_id: uuid.UUID) -> WorkOrder | None:
        work_order = await self.session.get(WorkOrder, work_order_id)
        if work_order is None:
            return None
        work_order.assigned_vendor_id = vendor_id
        if work_order.status == WorkOrderStatus.OPEN.value:
            work_order.status = WorkOrderStatus.ASSIGNED.value
        await self.session.commit()
        await self.session.refresh(work_order)
        return work_order

    async def approve(self, work_order_id: uuid.UUID, approver_id: uuid.UUID) -> WorkOrder | None:
        work_order = await self.session.get(WorkOrder, work_order_id)
        if work_order is None:
            return None
        work_order.approved_by = approver_id
        work_order.approved_at = datetime.now(timezone.utc)
        await self.session.commit()
        await self.session.refresh(work_order)
        return work_order

    async def delete(self, work_order_id: uuid.UUID) -> bool:
        work_order = await self.session.get(WorkOrder, work_order_id)
        if work_order is None:
            return False
        await self.session.delete(work_order)
        await self.session.commit()
        return True
