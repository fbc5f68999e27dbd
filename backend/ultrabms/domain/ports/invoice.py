from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol

from ...auth.scope import ScopeFilter


class InvoiceData(Protocol):
    id: uuid.UUID
    invoice_number: str
    tenant_id: uuid.UUID
    property_id: uuid.UUID
    total_amount: Decimal
    paid_amount: Decimal
    status: str
    due_date: date
    created_at: datetime


class InvoicePort(Protocol):
    async def get(self, invoice_id: uuid.UUID) -> InvoiceData | None:
        ...

    async def list(
        self, scope: ScopeFilter, limit: int, offset: int
    ) -> list[InvoiceData]:
        ...

    async def list_all(self, scope: ScopeFilter) -> list[InvoiceData]:
        ...

    async def create(self, data: dict[str, Any]) -> InvoiceData:
        ...

    async def delete(self, invoice_id: uuid.UUID) -> bool:
        ...
