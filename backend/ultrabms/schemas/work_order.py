from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models.work_order import WorkOrderPriority, WorkOrderStatus


class WorkOrderCreate(BaseModel):
    property_id: UUID
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    priority: WorkOrderPriority = WorkOrderPriority.MEDIUM


class WorkOrderStatusUpdate(BaseModel):
    status: WorkOrderStatus


class WorkOrderAssign(BaseModel):
    vendor_id: UUID


class WorkOrderRead(BaseModel):
    id: UUID
    property_id: UUID
    requested_by: UUID | None = None
    assigned_vendor_id: UUID | None = None
    title: str
    description: str | None = None
    status: WorkOrderStatus
    priority: WorkOrderPriority
    approved_by: UUID | None = None
    approved_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
