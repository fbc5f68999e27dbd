import uuid
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from .auth.gate import AuthorizationGate
from .auth.principal import Principal
from .crud.audit_log import AuditLogRepository
from .crud.invoice import InvoiceRepository
from .crud.property import PropertyRepository
from .crud.tenant import TenantRepository
from .crud.user import UserRepository
from .crud.vendor import VendorRepository
from .crud.work_order import WorkOrderRepository
from .database import AsyncSessionLocal, get_session
from .domain.ports.invoice import InvoicePort
from .domain.ports.property import PropertyPort
from .domain.ports.tenant import TenantPort
from .domain.ports.user import UserPort
from .domain.ports.vendor import VendorPort
from .domain.ports.work_order import WorkOrderPort
from .errors import ConfigurationError, PrincipalMissing
from .security.token_inspection import ExpiredTokenError, InvalidTokenError, validate_access_token
from .services.audit_service import AuditService
from .services.principal_service import resolve_principal

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


async def get_audit_service() -> AsyncGenerator[AuditService, None]:
    # Separate session so a denial record never rides on the request transaction
    async with AsyncSessionLocal() as session:
        yield AuditService(session)


def get_user_port(db: AsyncSession = Depends(get_db)) -> UserPort:
    return UserRepository(db)


def get_property_port(db: AsyncSession = Depends(get_db)) -> PropertyPort:
    return PropertyRepository(db)


def get_tenant_port(db: AsyncSession = Depends(get_db)) -> TenantPort:
    return TenantRepository(db)


def get_work_order_port(db: AsyncSession = Depends(get_db)) -> WorkOrderPort:
    return WorkOrderRepository(db)


def get_vendor_port(db: AsyncSession = Depends(get_db)) -> VendorPort:
    return VendorRepository(db)


def get_invoice_port(db: AsyncSession = Depends(get_db)) -> InvoicePort:
    return InvoiceRepository(db)


def get_audit_log_repository(db: AsyncSession = Depends(get_db)) -> AuditLogRepository:
    return AuditLogRepository(db)


def get_authorization_gate(request: Request) -> AuthorizationGate:
    gate = getattr(request.app.state, "authorization_gate", None)
    if gate is None:
        raise ConfigurationError("Authorization gate was not initialised at startup")
    return gate


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    user_port: UserPort = Depends(get_user_port),
) -> Principal:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise PrincipalMissing("Not authenticated")

    try:
        payload = validate_access_token(credentials.credentials)
    except ExpiredTokenError:
        raise PrincipalMissing("Token has expired") from None
    except InvalidTokenError:
        raise PrincipalMissing("Invalid token") from None

    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        raise PrincipalMissing("Invalid token payload") from None

    principal = await resolve_principal(user_port, user_id)
    if principal is None:
        raise PrincipalMissing("User not found or inactive")
    return principal
