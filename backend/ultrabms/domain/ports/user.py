from __future__ import annotations

import uuid
from datetime import datetime
from typing import Protocol


class UserData(Protocol):
    id: uuid.UUID
    email: str
    full_name: str
    role: str
    is_active: bool
    created_at: datetime


class UserPort(Protocol):
    async def get(self, user_id: uuid.UUID) -> UserData | None:
        ...

    async def list(self, limit: int, offset: int) -> list[UserData]:
        ...

    async def assigned_property_ids(self, user_id: uuid.UUID) -> frozenset[uuid.UUID]:
        ...

    async def tenant_id_for(self, user_id: uuid.UUID) -> uuid.UUID | None:
        ...

    async def vendor_id_for(self, user_id: uuid.UUID) -> uuid.UUID | None:
        ...

    async def update_role(self, user_id: uuid.UUID, role: str) -> UserData | None:
        ...
