from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ..auth.matrix import Role


class UserRead(BaseModel):
    id: UUID
    email: str
    full_name: str
    role: Role
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserRoleUpdate(BaseModel):
    role: Role


class CurrentUserRead(BaseModel):
    """Authenticated principal as the frontend consumes it."""
    id: UUID
    email: str | None = None
    role: Role
    permissions: list[str]
    assigned_property_ids: list[UUID] = []
    tenant_id: UUID | None = None
    vendor_id: UUID | None = None
