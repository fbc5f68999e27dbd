from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ..auth.dependencies import AuthorizationContext, require
from ..auth.requirements import Permission
from ..dependencies import get_vendor_port
from ..domain.ports.vendor import VendorPort
from ..errors import NotFoundError
from ..schemas.vendor import VendorCreate, VendorRating, VendorRead, VendorUpdate

router = APIRouter(prefix="/vendors", tags=["vendors"])


@router.get("", response_model=list[VendorRead])
async def list_vendors(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _: AuthorizationContext = Depends(require(Permission("vendor:read"))),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> list[VendorRead]:
    vendors = await vendor_port.list(limit, offset)
    return [VendorRead.model_validate(vendor) for vendor in vendors]


@router.get("/{vendor_id}", response_model=VendorRead)
async def get_vendor(
    vendor_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("vendor:read"))),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> VendorRead:
    vendor = await vendor_port.get(vendor_id)
    if vendor is None:
        raise NotFoundError("Vendor not found")
    return VendorRead.model_validate(vendor)


@router.post("", response_model=VendorRead, status_code=status.HTTP_201_CREATED)
async def create_vendor(
    payload: VendorCreate,
    _: AuthorizationContext = Depends(require(Permission("vendor:create"))),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> VendorRead:
    return VendorRead.model_validate(await vendor_port.create(payload.model_dump()))


@router.put("/{vendor_id}", response_model=VendorRead)
async def update_vendor(
    vendor_id: UUID,
    payload: VendorUpdate,
    _: AuthorizationContext = Depends(require(Permission("vendor:update"))),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> VendorRead:
    vendor = await vendor_port.update(vendor_id, payload.model_dump(exclude_unset=True))
    if vendor is None:
        raise NotFoundError("Vendor not found")
    return VendorRead.model_validate(vendor)


@router.post("/{vendor_id}/rating", response_model=VendorRead)
async def rate_vendor(
    vendor_id: UUID,
    payload: VendorRating,
    _: AuthorizationContext = Depends(require(Permission("vendor:performance"))),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> VendorRead:
    vendor = await vendor_port.add_rating(vendor_id, payload.score)
    if vendor is None:
        raise NotFoundError("Vendor not found")
    return VendorRead.model_validate(vendor)


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(
    vendor_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("vendor:delete"))),
    vendor_port: VendorPort = Depends(get_vendor_port),
) -> None:
    if not await vendor_port.delete(vendor_id):
        raise NotFoundError("Vendor not found")
