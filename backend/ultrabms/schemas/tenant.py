from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TenantCreate(BaseModel):
    user_id: UUID | None = None
    property_id: UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    phone: str | None = None
    lease_start: date | None = None
    lease_end: date | None = None


class TenantUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    phone: str | None = None
    lease_start: date | None = None
    lease_end: date | None = None


class TenantRead(BaseModel):
    id: UUID
    user_id: UUID | None = None
    property_id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    lease_start: date | None = None
    lease_end: date | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
