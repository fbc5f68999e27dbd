import uuid

import pytest

from ultrabms.auth.matrix import Role
from ultrabms.services.principal_service import resolve_principal
from tests.fakes import FakeUserPort


@pytest.mark.anyio
async def test_unknown_user_has_no_principal():
    assert await resolve_principal(FakeUserPort(), uuid.uuid4()) is None


@pytest.mark.anyio
async def test_inactive_user_has_no_principal():
    user = FakeUserPort.user(Role.SUPER_ADMIN.value, is_active=False)
    assert await resolve_principal(FakeUserPort([user]), user.id) is None


@pytest.mark.anyio
async def test_manager_principal_lists_assigned_properties():
    user = FakeUserPort.user(Role.PROPERTY_MANAGER.value)
    p1, p2 = uuid.uuid4(), uuid.uuid4()
    port = FakeUserPort([user], assigned={user.id: {p1, p2}})

    principal = await resolve_principal(port, user.id)

    assert principal.role is Role.PROPERTY_MANAGER
    assert principal.assigned_property_ids == frozenset({p1, p2})
    assert principal.tenant_id is None
    assert principal.vendor_id is None


@pytest.mark.anyio
async def test_vendor_principal_carries_vendor_id():
    user = FakeUserPort.user(Role.VENDOR.value)
    vendor_id = uuid.uuid4()
    port = FakeUserPort([user], vendor_ids={user.id: vendor_id})

    principal = await resolve_principal(port, user.id)

    assert principal.vendor_id == vendor_id
    assert principal.assigned_property_ids == frozenset()


@pytest.mark.anyio
async def test_tenant_principal_carries_tenant_id():
    user = FakeUserPort.user(Role.TENANT.value, email="t1@example.com")
    tenant_id = uuid.uuid4()
    port = FakeUserPort([user], tenant_ids={user.id: tenant_id})

    principal = await resolve_principal(port, user.id)

    assert principal.tenant_id == tenant_id
    assert principal.email == "t1@example.com"
