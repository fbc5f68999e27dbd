from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PropertyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=500)
    total_units: int = Field(default=0, ge=0)
    manager_id: UUID | None = None


class PropertyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, min_length=1, max_length=500)
    total_units: int | None = Field(default=None, ge=0)


class PropertyManagerAssign(BaseModel):
    manager_id: UUID | None


class PropertyRead(BaseModel):
    id: UUID
    name: str
    address: str
    total_units: int
    manager_id: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
