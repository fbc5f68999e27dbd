from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ..auth.dependencies import AuthorizationContext, TargetLoader, require
from ..auth.matrix import Role
from ..auth.principal import ResourceRef
from ..auth.requirements import HasRole, Permission
from ..auth.scope import ScopeFilter
from ..dependencies import get_tenant_port
from ..domain.ports.tenant import TenantData, TenantPort
from ..errors import NotFoundError
from ..schemas.tenant import TenantCreate, TenantRead, TenantUpdate

router = APIRouter(prefix="/tenants", tags=["tenants"])

STAFF_TENANT_ACCESS = (Permission("tenant:read") | Permission("tenant:update")) & HasRole(
    Role.PROPERTY_MANAGER, Role.SUPER_ADMIN
)


def _ref(tenant: TenantData) -> ResourceRef:
    return ResourceRef.for_tenant(tenant.id, tenant.user_id, tenant.property_id)


def tenant_target(
    tenant_id: UUID,
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> TargetLoader:
    async def load() -> ResourceRef:
        tenant = await tenant_port.get(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return _ref(tenant)

    return load


@router.get("", response_model=list[TenantRead])
async def list_tenants(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthorizationContext = Depends(require(Permission("tenant:read"))),
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> list[TenantRead]:
    rows = await tenant_port.list(auth.scope_filter, limit, offset)
    return [TenantRead.model_validate(row) for row in auth.filter(rows, _ref)]


@router.get("/by-property/{property_id}", response_model=list[TenantRead])
async def list_tenants_by_property(
    property_id: UUID,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthorizationContext = Depends(require(STAFF_TENANT_ACCESS)),
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> list[TenantRead]:
    rows = await tenant_port.list(
        ScopeFilter(property_ids=frozenset({property_id})), limit, offset
    )
    return [TenantRead.model_validate(row) for row in auth.filter(rows, _ref)]


@router.get("/{tenant_id}", response_model=TenantRead)
async def get_tenant(
    tenant_id: UUID,
    _: AuthorizationContext = Depends(
        require(Permission("tenant:read") | Permission("tenant:read:own"), target=tenant_target)
    ),
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> TenantRead:
    tenant = await tenant_port.get(tenant_id)
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return TenantRead.model_validate(tenant)


@router.post("", response_model=TenantRead, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    payload: TenantCreate,
    _: AuthorizationContext = Depends(require(Permission("tenant:create"))),
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> TenantRead:
    tenant = await tenant_port.create(payload.model_dump())
    return TenantRead.model_validate(tenant)


@router.put("/{tenant_id}", response_model=TenantRead)
async def update_tenant(
    tenant_id: UUID,
    payload: TenantUpdate,
    _: AuthorizationContext = Depends(
        require(Permission("tenant:update"), target=tenant_target)
    ),
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> TenantRead:
    tenant = await tenant_port.update(tenant_id, payload.model_dump(exclude_unset=True))
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return TenantRead.model_validate(tenant)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tenant(
    tenant_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("tenant:delete"))),
    tenant_port: TenantPort = Depends(get_tenant_port),
) -> None:
    if not await tenant_port.delete(tenant_id):
        raise NotFoundError("Tenant not found")
