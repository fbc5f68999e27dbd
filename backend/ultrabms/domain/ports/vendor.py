from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol


class VendorData(Protocol):
    id: uuid.UUID
    user_id: uuid.UUID | None
    company_name: str
    email: str
    service_category: str | None
    rating: Decimal | float | None
    rating_count: int
    is_active: bool
    created_at: datetime


class VendorPort(Protocol):
    async def get(self, vendor_id: uuid.UUID) -> VendorData | None:
        ...

    async def list(self, limit: int, offset: int) -> list[VendorData]:
        ...

    async def create(self, data: dict[str, Any]) -> VendorData:
        ...

    async def update(
        self, vendor_id: uuid.UUID, changes: dict[str, Any]
    ) -> VendorData | None:
        ...

    async def add_rating(self, vendor_id: uuid.UUID, score: int) -> VendorData | None:
        ...

    async def delete(self, vendor_id: uuid.UUID) -> bool:
        ...
