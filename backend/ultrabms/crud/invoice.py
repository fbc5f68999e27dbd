from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.scope import ScopeFilter
from ..models.invoice import Invoice
from ..models.tenant import Tenant
from ._scoping import apply_scope


class InvoiceRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _scoped_query(self, scope: ScopeFilter):
        query = select(Invoice)
        if scope.owner_id is not None:
            query = query.join(Tenant, Tenant.id == Invoice.tenant_id)
        return apply_scope(
            query,
            scope,
            owner_column=Tenant.user_id,
            property_column=Invoice.property_id,
        )

    async def get(self, invoice_id: uuid.UUID) -> Invoice | None:
        return await self.session.get(Invoice, invoice_id)

    async def list(self, scope: ScopeFilter, limit: int, offset: int) -> list[Invoice]:
        result = await self.session.execute(
            self._scoped_query(scope)
            .order_by(Invoice.due_date.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def list_all(self, scope: ScopeFilter) -> list[Invoice]:
        result = await self.session.execute(self._scoped_query(scope))
        return list(result.scalars().all())

    async def create(self, data: dict[str, Any]) -> Invoice:
        invoice = Invoice(**data)
        self.session.add(invoice)
        await self.session.commit()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice_id: uuid.UUID) -> bool:
        invoice = await self.session.get(Invoice, invoice_id)
        if invoice is None:
            return False
        await self.session.delete(invoice)
        await self.session.commit()
        return True
