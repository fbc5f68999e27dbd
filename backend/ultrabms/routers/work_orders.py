import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ..auth.dependencies import AuthorizationContext, TargetLoader, require
from ..auth.principal import ResourceRef
from ..auth.requirements import Permission
from ..dependencies import get_vendor_port, get_work_order_port
from ..domain.ports.vendor import VendorPort
from ..domain.ports.work_order import WorkOrderData, WorkOrderPort
from ..errors import NotFoundError, ValidationError
from ..models.work_order import WorkOrderStatus
from ..schemas.work_order import (
    WorkOrderAssign,
    WorkOrderCreate,
    WorkOrderRead,
    WorkOrderStatusUpdate,
)

logger = logging.getLogger("ultrabms.work_orders")

router = APIRouter(prefix="/work-orders", tags=["work-orders"])


def _ref(work_order: WorkOrderData) -> ResourceRef:
    return ResourceRef.for_work_order(
        work_order.id,
        work_order.requested_by,
        property_id=work_order.property_id,
        assigned_vendor_id=work_order.assigned_vendor_id,
    )


def work_order_target(
    work_order_id: UUID,
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> TargetLoader:
    async def load() -> ResourceRef:
        work_order = await work_order_port.get(work_order_id)
        if work_order is None:
            raise NotFoundError("Work order not found")
        return _ref(work_order)

    return load


async def _get_or_404(port: WorkOrderPort, work_order_id: UUID) -> WorkOrderData:
    work_order = await port.get(work_order_id)
    if work_order is None:
        raise NotFoundError("Work order not found")
    return work_order


@router.get("", response_model=list[WorkOrderRead])
async def list_work_orders(
    status_filter: WorkOrderStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthorizationContext = Depends(require(Permission("workorder:read"))),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> list[WorkOrderRead]:
    rows = await work_order_port.list(
        auth.scope_filter,
        limit,
        offset,
        status=status_filter.value if status_filter else None,
    )
    return [WorkOrderRead.model_validate(row) for row in auth.filter(rows, _ref)]


@router.get("/{work_order_id}", response_model=WorkOrderRead)
async def get_work_order(
    work_order_id: UUID,
    _: AuthorizationContext = Depends(
        require(Permission("workorder:read"), target=work_order_target)
    ),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> WorkOrderRead:
    return WorkOrderRead.model_validate(await _get_or_404(work_order_port, work_order_id))


@router.post("", response_model=WorkOrderRead, status_code=status.HTTP_201_CREATED)
async def create_work_order(
    payload: WorkOrderCreate,
    auth: AuthorizationContext = Depends(require(Permission("workorder:create"))),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> WorkOrderRead:
    work_order = await work_order_port.create(
        property_id=payload.property_id,
        requested_by=auth.principal.user_id,
        title=payload.title,
        description=payload.description,
        priority=payload.priority.value,
    )
    return WorkOrderRead.model_validate(work_order)


@router.patch("/{work_order_id}/status", response_model=WorkOrderRead)
async def update_work_order_status(
    work_order_id: UUID,
    payload: WorkOrderStatusUpdate,
    _: AuthorizationContext = Depends(
        require(Permission("workorder:update"), target=work_order_target)
    ),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> WorkOrderRead:
    work_order = await work_order_port.set_status(work_order_id, payload.status.value)
    if work_order is None:
        raise NotFoundError("Work order not found")
    return WorkOrderRead.model_validate(work_order)


@router.post("/{work_order_id}/assign", response_model=WorkOrderRead)
async def assign_work_order(
    work_order_id: UUID,
    payload: WorkOrderAssign,
    auth: AuthorizationContext = Depends(
        require(Permission("workorder:assign"), target=work_order_target)
    ),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> WorkOrderRead:
    vendor = await vendor_port.get(payload.vendor_id)
    if vendor is None or not vendor.is_active:
        raise ValidationError("vendor_id must reference an active vendor")

    work_order = await work_order_port.assign(work_order_id, payload.vendor_id)
    if work_order is None:
        raise NotFoundError("Work order not found")

    logger.info(
        "Work order assigned work_order=%s vendor=%s by=%s",
        work_order_id,
        payload.vendor_id,
        auth.principal.user_id,
    )
    return WorkOrderRead.model_validate(work_order)


@router.post("/{work_order_id}/approve", response_model=WorkOrderRead)
async def approve_work_order(
    work_order_id: UUID,
    auth: AuthorizationContext = Depends(require(Permission("workorder:approve"))),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> WorkOrderRead:
    work_order = await work_order_port.approve(work_order_id, auth.principal.user_id)
    if work_order is None:
        raise NotFoundError("Work order not found")
    return WorkOrderRead.model_validate(work_order)


@router.delete("/{work_order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_work_order(
    work_order_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("workorder:delete"))),
    work_order_port: WorkOrderPort = Depends(get_work_order_port),
) -> None:
    if not await work_order_port.delete(work_order_id):
        raise NotFoundError("Work order not found")
