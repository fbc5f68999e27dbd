from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class VendorCreate(BaseModel):
    user_id: UUID | None = None
    company_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    service_category: str | None = None


class VendorUpdate(BaseModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    service_category: str | None = None
    is_active: bool | None = None


class VendorRating(BaseModel):
    score: int = Field(ge=1, le=5)


class VendorRead(BaseModel):
    id: UUID
    user_id: UUID | None = None
    company_name: str
    email: str
    service_category: str | None = None
    rating: Decimal | None = None
    rating_count: int = 0
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
