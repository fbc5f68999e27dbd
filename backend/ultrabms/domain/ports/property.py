from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Protocol

from ...auth.scope import ScopeFilter


class PropertyData(Protocol):
    id: uuid.UUID
    name: str
    address: str
    total_units: int
    manager_id: uuid.UUID | None
    created_at: datetime


class PropertyPort(Protocol):
    async def get(self, property_id: uuid.UUID) -> PropertyData | None:
        ...

    async def list(
        self, scope: ScopeFilter, limit: int, offset: int
    ) -> list[PropertyData]:
        ...

    async def create(
        self,
        name: str,
        address: str,
        total_units: int,
        manager_id: uuid.UUID | None,
    ) -> PropertyData:
        ...

    async def update(
        self, property_id: uuid.UUID, changes: dict[str, Any]
    ) -> PropertyData | None:
        ...

    async def delete(self, property_id: uuid.UUID) -> bool:
        ...
