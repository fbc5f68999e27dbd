"""In-memory stand-ins for the persistence ports used by API tests."""
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FakeUserPort:
    def __init__(self, users=(), assigned=None, tenant_ids=None, vendor_ids=None):
        self.users = {user.id: user for user in users}
        self.assigned = assigned or {}
        self.tenant_ids = tenant_ids or {}
        self.vendor_ids = vendor_ids or {}

    @staticmethod
    def user(role: str, *, is_active: bool = True, email: str | None = None):
        user_id = uuid.uuid4()
        return SimpleNamespace(
            id=user_id,
            email=email or f"{user_id.hex[:8]}@example.com",
            full_name="Test User",
            role=role,
            is_active=is_active,
            created_at=_now(),
        )

    async def get(self, user_id):
        return self.users.get(user_id)

    async def list(self, limit, offset):
        return list(self.users.values())[offset:offset + limit]

    async def assigned_property_ids(self, user_id):
        return frozenset(self.assigned.get(user_id, ()))

    async def tenant_id_for(self, user_id):
        return self.tenant_ids.get(user_id)

    async def vendor_id_for(self, user_id):
        return self.vendor_ids.get(user_id)

    async def update_role(self, user_id, role):
        user = self.users.get(user_id)
        if user is None:
            return None
        user.role = role
        return user


class FakeWorkOrderPort:
    """Ignores the scope filter so the gate's own row filter is exercised."""

    def __init__(self, work_orders=()):
        self.work_orders = {wo.id: wo for wo in work_orders}
        self.scopes = []

    @staticmethod
    def work_order(property_id, *, requested_by=None, assigned_vendor_id=None, status="OPEN"):
        return SimpleNamespace(
            id=uuid.uuid4(),
            property_id=property_id,
            requested_by=requested_by,
            assigned_vendor_id=assigned_vendor_id,
            title="Leaking tap",
            description=None,
            status=status,
            priority="MEDIUM",
            approved_by=None,
            approved_at=None,
            created_at=_now(),
        )

    async def get(self, work_order_id):
        return self.work_orders.get(work_order_id)

    async def list(self, scope, limit, offset, status=None):
        self.scopes.append(scope)
        rows = [wo for wo in self.work_orders.values() if status is None or wo.status == status]
        return rows[offset:offset + limit]

    async def create(self, property_id, requested_by, title, description, priority):
        work_order = self.work_order(property_id, requested_by=requested_by)
        work_order.title = title
        work_order.description = description
        work_order.priority = priority
        self.work_orders[work_order.id] = work_order
        return work_order

    async def set_status(self, work_order_id, status):
        work_order = self.work_orders.get(work_order_id)
        if work_order is not None:
            work_order.status = status
        return work_order

    async def assign(self, work_order_id, vendor_id):
        work_order = self.work_orders.get(work_order_id)
        if work_order is not None:
            work_order.assigned_vendor_id = vendor_id
            work_order.status = "ASSIGNED"
        return work_order

    async def approve(self, work_order_id, approver_id):
        work_order = self.work_orders.get(work_order_id)
        if work_order is not None:
            work_order.approved_by = approver_id
            work_order.approved_at = _now()
        return work_order

    async def delete(self, work_order_id):
        return self.work_orders.pop(work_order_id, None) is not None


class FakeTenantPort:
    def __init__(self, tenants=()):
        self.tenants = {tenant.id: tenant for tenant in tenants}

    @staticmethod
    def tenant(property_id, user_id=None):
        return SimpleNamespace(
            id=uuid.uuid4(),
            user_id=user_id,
            property_id=property_id,
            first_name="Amal",
            last_name="Haddad",
            email="amal@example.com",
            phone=None,
            lease_start=None,
            lease_end=None,
            created_at=_now(),
        )

    async def get(self, tenant_id):
        return self.tenants.get(tenant_id)

    async def list(self, scope, limit, offset):
        rows = list(self.tenants.values())
        if scope.property_ids is not None:
            rows = [row for row in rows if row.property_id in scope.property_ids]
        return rows[offset:offset + limit]

    async def create(self, data):
        tenant = self.tenant(data["property_id"], data.get("user_id"))
        self.tenants[tenant.id] = tenant
        return tenant

    async def update(self, tenant_id, changes):
        tenant = self.tenants.get(tenant_id)
        if tenant is not None:
            for field, value in changes.items():
                setattr(tenant, field, value)
        return tenant

    async def delete(self, tenant_id):
        return self.tenants.pop(tenant_id, None) is not None


class FakePropertyPort:
    def __init__(self, properties=()):
        self.properties = {prop.id: prop for prop in properties}

    @staticmethod
    def property(manager_id=None):
        return SimpleNamespace(
            id=uuid.uuid4(),
            name="Marina Heights",
            address="1 Harbour Road",
            total_units=40,
            manager_id=manager_id,
            created_at=_now(),
        )

    async def get(self, property_id):
        return self.properties.get(property_id)

    async def list(self, scope, limit, offset):
        return list(self.properties.values())[offset:offset + limit]

    async def create(self, name, address, total_units, manager_id):
        prop = self.property(manager_id)
        prop.name, prop.address, prop.total_units = name, address, total_units
        self.properties[prop.id] = prop
        return prop

    async def update(self, property_id, changes):
        prop = self.properties.get(property_id)
        if prop is not None:
            for field, value in changes.items():
                setattr(prop, field, value)
        return prop

    async def delete(self, property_id):
        return self.properties.pop(property_id, None) is not None


class FakeInvoicePort:
    def __init__(self, invoices=()):
        self.invoices = {invoice.id: invoice for invoice in invoices}

    @staticmethod
    def invoice(property_id, *, total="100.00", paid="0.00", status="SENT", due=None):
        return SimpleNamespace(
            id=uuid.uuid4(),
            invoice_number=f"INV-{uuid.uuid4().hex[:6]}",
            tenant_id=uuid.uuid4(),
            property_id=property_id,
            total_amount=Decimal(total),
            paid_amount=Decimal(paid),
            status=status,
            due_date=due or date(2030, 1, 1),
            created_at=_now(),
        )

    async def get(self, invoice_id):
        return self.invoices.get(invoice_id)

    async def list(self, scope, limit, offset):
        return list(self.invoices.values())[offset:offset + limit]

    async def list_all(self, scope):
        return list(self.invoices.values())

    async def create(self, data):
        invoice = self.invoice(data["property_id"])
        self.invoices[invoice.id] = invoice
        return invoice

    async def delete(self, invoice_id):
        return self.invoices.pop(invoice_id, None) is not None


class RecordingAuditService:
    def __init__(self):
        self.denials = []

    async def log_permission_denied(self, principal, decision, **kwargs):
        self.denials.append((principal, decision, kwargs))


class FakeAuditLogRepository:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.filters = []

    async def list_denials(self, **filters):
        self.filters.append(filters)
        return self.rows
