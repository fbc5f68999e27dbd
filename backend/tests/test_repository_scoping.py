import uuid
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from ultrabms.auth.scope import ScopeFilter
from ultrabms.crud._scoping import apply_scope
from ultrabms.crud.invoice import InvoiceRepository
from ultrabms.crud.vendor import VendorRepository
from ultrabms.crud.work_order import WorkOrderRepository
from ultrabms.models.work_order import WorkOrder


def _sql(query) -> str:
    return str(query.compile(dialect=postgresql.dialect()))


def _work_order_query(scope: ScopeFilter):
    return apply_scope(
        select(WorkOrder),
        scope,
        owner_column=WorkOrder.requested_by,
        property_column=WorkOrder.property_id,
        vendor_column=WorkOrder.assigned_vendor_id,
    )


def test_unrestricted_scope_leaves_query_alone():
    assert "WHERE" not in _sql(_work_order_query(ScopeFilter()))


def test_owner_scope_filters_on_owner_column():
    sql = _sql(_work_order_query(ScopeFilter(owner_id=uuid.uuid4())))
    assert "work_orders.requested_by = " in sql


def test_vendor_scope_filters_on_vendor_column():
    sql = _sql(_work_order_query(ScopeFilter(assigned_vendor_id=uuid.uuid4())))
    assert "work_orders.assigned_vendor_id = " in sql


def test_property_scope_filters_with_in_clause():
    sql = _sql(_work_order_query(ScopeFilter(property_ids=frozenset({uuid.uuid4()}))))
    assert "work_orders.property_id IN" in sql


def test_scope_without_matching_column_matches_nothing():
    query = apply_scope(select(WorkOrder), ScopeFilter(owner_id=uuid.uuid4()))
    assert "false" in _sql(query).lower()


def _session_with(entity) -> MagicMock:
    session = MagicMock()
    session.get = AsyncMock(return_value=entity)
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.mark.anyio
async def test_vendor_rating_is_running_average():
    vendor = SimpleNamespace(rating=Decimal("4.00"), rating_count=2)
    repo = VendorRepository(_session_with(vendor))

    updated = await repo.add_rating(uuid.uuid4(), 5)

    assert updated.rating == Decimal("4.33")
    assert updated.rating_count == 3


@pytest.mark.anyio
async def test_first_rating_sets_score():
    vendor = SimpleNamespace(rating=None, rating_count=0)
    repo = VendorRepository(_session_with(vendor))

    updated = await repo.add_rating(uuid.uuid4(), 3)

    assert updated.rating == Decimal("3.00")


@pytest.mark.anyio
async def test_assigning_open_work_order_moves_it_to_assigned():
    work_order = SimpleNamespace(assigned_vendor_id=None, status="OPEN")
    vendor_id = uuid.uuid4()
    repo = WorkOrderRepository(_session_with(work_order))

    updated = await repo.assign(uuid.uuid4(), vendor_id)

    assert updated.assigned_vendor_id == vendor_id
    assert updated.status == "ASSIGNED"


@pytest.mark.anyio
async def test_assigning_missing_work_order_returns_none():
    repo = WorkOrderRepository(_session_with(None))
    assert await repo.assign(uuid.uuid4(), uuid.uuid4()) is None


def test_denial_query_is_limited_to_permission_denials():
    from ultrabms.crud.audit_log import _denial_conditions
    from ultrabms.models.audit_log import AuditLog

    conditions = _denial_conditions(None, "VENDOR", "workorder:read", None, None, None)
    where = _sql(select(AuditLog).where(*conditions)).split("WHERE", 1)[1]

    assert "audit_logs.action = " in where
    assert "audit_logs.actor_role = " in where
    assert "audit_logs.entity_id = " in where
    assert "audit_logs.reason" not in where


def test_invoice_repository_scopes_by_property():
    property_id = uuid.uuid4()
    repo = InvoiceRepository(MagicMock())

    sql = _sql(repo._scoped_query(ScopeFilter(property_ids=frozenset({property_id}))))

    assert "invoices.property_id IN" in sql
    assert "JOIN" not in sql


def test_invoice_repository_joins_tenant_for_owner_scope():
    repo = InvoiceRepository(MagicMock())

    sql = _sql(repo._scoped_query(ScopeFilter(owner_id=uuid.uuid4())))

    assert "JOIN tenants" in sql
    assert "tenants.user_id = " in sql


@pytest.mark.anyio
async def test_invoice_list_all_returns_scoped_rows():
    invoice = SimpleNamespace(id=uuid.uuid4())
    session = MagicMock()
    result = MagicMock()
    result.scalars.return_value.all.return_value = [invoice]
    session.execute = AsyncMock(return_value=result)
    repo = InvoiceRepository(session)

    rows = await repo.list_all(ScopeFilter(property_ids=frozenset({uuid.uuid4()})))

    assert rows == [invoice]
    session.execute.assert_awaited_once()
