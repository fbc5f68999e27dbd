from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Protocol

from ...auth.scope import ScopeFilter


class TenantData(Protocol):
    id: uuid.UUID
    user_id: uuid.UUID | None
    property_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    lease_start: date | None
    lease_end: date | None
    created_at: datetime


class TenantPort(Protocol):
    async def get(self, tenant_id: uuid.UUID) -> TenantData | None:
        ...

    async def list(
        self, scope: ScopeFilter, limit: int, offset: int
    ) -> list[TenantData]:
        ...

    async def create(self, data: dict[str, Any]) -> TenantData:
        ...

    async def update(
        self, tenant_id: uuid.UUID, changes: dict[str, Any]
    ) -> TenantData | None:
        ...

    async def delete(self, tenant_id: uuid.UUID) -> bool:
        ...
