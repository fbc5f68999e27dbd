from __future__ import annotations

import uuid
from datetime import datetime
from typing import Protocol

from ...auth.scope import ScopeFilter


class WorkOrderData(Protocol):
    id: uuid.UUID
    property_id: uuid.UUID
    requested_by: uuid.UUID | None
    assigned_vendor_id: uuid.UUID | None
    title: str
    description: str | None
    status: str
    priority: str
    approved_by: uuid.UUID | None
    approved_at: datetime | None
    created_at: datetime


class WorkOrderPort(Protocol):
    async def get(self, work_order_id: uuid.UUID) -> WorkOrderData | None:
        ...

    async def list(
        self,
        scope: ScopeFilter,
        limit: int,
        offset: int,
        status: str | None = None,
    ) -> list[WorkOrderData]:
        ...

    async def create(
        self,
        property_id: uuid.UUID,
        requested_by: uuid.UUID,
        title: str,
        description: str | None,
        priority: str,
    ) -> WorkOrderData:
        ...

    async def set_status(
        self, work_order_id: uuid.UUID, status: str
    ) -> WorkOrderData | None:
        ...

    async def assign(
        self, work_order_id: uuid.UUID, vendor_id: uuid.UUID
    ) -> WorkOrderData | None:
        ...

    async def approve(
        self, work_order_id: uuid.UUID, approver_id: uuid.UUID
    ) -> WorkOrderData | None:
        ...

    async def delete(self, work_order_id: uuid.UUID) -> bool:
        ...
