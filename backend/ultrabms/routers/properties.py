from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ..auth.dependencies import AuthorizationContext, TargetLoader, require
from ..auth.matrix import Role
from ..auth.principal import ResourceRef
from ..auth.requirements import HasRole, Permission
from ..dependencies import get_property_port, get_user_port
from ..domain.ports.property import PropertyData, PropertyPort
from ..domain.ports.user import UserPort
from ..errors import NotFoundError, ValidationError
from ..schemas.property import (
    PropertyCreate,
    PropertyManagerAssign,
    PropertyRead,
    PropertyUpdate,
)

router = APIRouter(prefix="/properties", tags=["properties"])

READ_PROPERTY = (
    Permission("property:read")
    | Permission("property:read:all")
    | Permission("property:read:assigned")
)


def _ref(prop: PropertyData) -> ResourceRef:
    return ResourceRef.for_property(prop.id)


def property_target(
    property_id: UUID,
    property_port: PropertyPort = Depends(get_property_port),
) -> TargetLoader:
    async def load() -> ResourceRef:
        prop = await property_port.get(property_id)
        if prop is None:
            raise NotFoundError("Property not found")
        return _ref(prop)

    return load


async def _ensure_property_manager(user_port: UserPort, manager_id: UUID | None) -> None:
    if manager_id is None:
        return
    manager = await user_port.get(manager_id)
    if manager is None or manager.role != Role.PROPERTY_MANAGER.value:
        raise ValidationError("manager_id must reference a property manager")


@router.get("", response_model=list[PropertyRead])
async def list_properties(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthorizationContext = Depends(require(READ_PROPERTY)),
    property_port: PropertyPort = Depends(get_property_port),
) -> list[PropertyRead]:
    rows = await property_port.list(auth.scope_filter, limit, offset)
    return [PropertyRead.model_validate(row) for row in auth.filter(rows, _ref)]


@router.get("/{property_id}", response_model=PropertyRead)
async def get_property(
    property_id: UUID,
    _: AuthorizationContext = Depends(require(READ_PROPERTY, target=property_target)),
    property_port: PropertyPort = Depends(get_property_port),
) -> PropertyRead:
    prop = await property_port.get(property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return PropertyRead.model_validate(prop)


@router.post("", response_model=PropertyRead, status_code=status.HTTP_201_CREATED)
async def create_property(
    payload: PropertyCreate,
    _: AuthorizationContext = Depends(require(Permission("property:create"))),
    property_port: PropertyPort = Depends(get_property_port),
    user_port: UserPort = Depends(get_user_port),
) -> PropertyRead:
    await _ensure_property_manager(user_port, payload.manager_id)
    prop = await property_port.create(
        name=payload.name,
        address=payload.address,
        total_units=payload.total_units,
        manager_id=payload.manager_id,
    )
    return PropertyRead.model_validate(prop)


@router.put("/{property_id}", response_model=PropertyRead)
async def update_property(
    property_id: UUID,
    payload: PropertyUpdate,
    _: AuthorizationContext = Depends(
        require(Permission("property:update"), target=property_target)
    ),
    property_port: PropertyPort = Depends(get_property_port),
) -> PropertyRead:
    prop = await property_port.update(property_id, payload.model_dump(exclude_unset=True))
    if prop is None:
        raise NotFoundError("Property not found")
    return PropertyRead.model_validate(prop)


@router.put("/{property_id}/manager", response_model=PropertyRead)
async def assign_property_manager(
    property_id: UUID,
    payload: PropertyManagerAssign,
    _: AuthorizationContext = Depends(
        require(Permission("property:update") & HasRole(Role.SUPER_ADMIN))
    ),
    property_port: PropertyPort = Depends(get_property_port),
    user_port: UserPort = Depends(get_user_port),
) -> PropertyRead:
    await _ensure_property_manager(user_port, payload.manager_id)
    prop = await property_port.update(property_id, {"manager_id": payload.manager_id})
    if prop is None:
        raise NotFoundError("Property not found")
    return PropertyRead.model_validate(prop)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
    property_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("property:delete"))),
    property_port: PropertyPort = Depends(get_property_port),
) -> None:
    if not await property_port.delete(property_id):
        raise NotFoundError("Property not found")
