"""Create users, properties, tenants, vendors, work orders, invoices and audit logs"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str | None = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = (
    'SUPER_ADMIN',
    'PROPERTY_MANAGER',
    'MAINTENANCE_SUPERVISOR',
    'FINANCE_MANAGER',
    'TENANT',
    'VENDOR',
)


def _uuid(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=True), **kwargs)


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)


def upgrade() -> None:
    """Apply schema changes."""
    role_values = ", ".join(f"'{role}'" for role in ROLES)
    op.create_table(
        'users',
        _uuid('id', nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint(f"role IN ({role_values})", name='valid_user_role'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'], unique=False)

    op.create_table(
        'properties',
        _uuid('id', nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('total_units', sa.Integer(), server_default='0', nullable=False),
        _uuid('manager_id', nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['manager_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_properties')),
    )
    op.create_index('ix_properties_manager_id', 'properties', ['manager_id'], unique=False)

    op.create_table(
        'tenants',
        _uuid('id', nullable=False),
        _uuid('user_id', nullable=True),
        _uuid('property_id', nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('lease_start', sa.Date(), nullable=True),
        sa.Column('lease_end', sa.Date(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tenants')),
        sa.UniqueConstraint('user_id', name=op.f('uq_tenants_user_id')),
    )
    op.create_index('ix_tenants_property_id', 'tenants', ['property_id'], unique=False)

    op.create_table(
        'vendors',
        _uuid('id', nullable=False),
        _uuid('user_id', nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('service_category', sa.String(length=100), nullable=True),
        sa.Column('rating', sa.Numeric(precision=3, scale=2), nullable=True),
        sa.Column('rating_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_vendors')),
        sa.UniqueConstraint('user_id', name=op.f('uq_vendors_user_id')),
    )

    op.create_table(
        'work_orders',
        _uuid('id', nullable=False),
        _uuid('property_id', nullable=False),
        _uuid('requested_by', nullable=True),
        _uuid('assigned_vendor_id', nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='OPEN', nullable=False),
        sa.Column('priority', sa.String(length=20), server_default='MEDIUM', nullable=False),
        _uuid('approved_by', nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint(
            "status IN ('OPEN', 'ASSIGNED', 'IN_PROGRESS', 'COMPLETED', 'CLOSED')",
            name='valid_work_order_status',
        ),
        sa.CheckConstraint(
            "priority IN ('LOW', 'MEDIUM', 'HIGH', 'URGENT')",
            name='valid_work_order_priority',
        ),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['requested_by'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assigned_vendor_id'], ['vendors.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_work_orders')),
    )
    op.create_index('ix_work_orders_property_id', 'work_orders', ['property_id'], unique=False)
    op.create_index('ix_work_orders_requested_by', 'work_orders', ['requested_by'], unique=False)
    op.create_index('ix_work_orders_assigned_vendor_id', 'work_orders', ['assigned_vendor_id'], unique=False)

    op.create_table(
        'invoices',
        _uuid('id', nullable=False),
        sa.Column('invoice_number', sa.String(length=50), nullable=False),
        _uuid('tenant_id', nullable=False),
        _uuid('property_id', nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(precision=12, scale=2), server_default='0', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='DRAFT', nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        _created_at(),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'SENT', 'PARTIALLY_PAID', 'PAID', 'OVERDUE', 'CANCELLED')",
            name='valid_invoice_status',
        ),
        sa.CheckConstraint('paid_amount <= total_amount', name='paid_not_above_total'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_invoices')),
        sa.UniqueConstraint('invoice_number', name=op.f('uq_invoices_invoice_number')),
    )
    op.create_index('ix_invoices_tenant_id', 'invoices', ['tenant_id'], unique=False)
    op.create_index('ix_invoices_property_id', 'invoices', ['property_id'], unique=False)

    op.create_table(
        'audit_logs',
        _uuid('id', nullable=False),
        _uuid('actor_id', nullable=True),
        sa.Column('actor_role', sa.String(length=50), nullable=True),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('entity_type', sa.String(length=100), nullable=False),
        sa.Column('entity_id', sa.String(length=255), nullable=False),
        sa.Column('reason', sa.String(length=50), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('request_id', sa.String(length=64), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "reason IS NULL OR reason IN ('INSUFFICIENT_PERMISSION', 'SCOPE_VIOLATION')",
            name='valid_audit_reason',
        ),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_audit_logs')),
    )
    for column in ('actor_id', 'actor_role', 'action', 'entity_type', 'entity_id', 'created_at'):
        op.create_index(f'ix_audit_logs_{column}', 'audit_logs', [column], unique=False)


def downgrade() -> None:
    """Revert schema changes."""
    for column in ('actor_id', 'actor_role', 'action', 'entity_type', 'entity_id', 'created_at'):
        op.drop_index(f'ix_audit_logs_{column}', table_name='audit_logs')
    op.drop_table('audit_logs')

    op.drop_index('ix_invoices_property_id', table_name='invoices')
    op.drop_index('ix_invoices_tenant_id', table_name='invoices')
    op.drop_table('invoices')

    op.drop_index('ix_work_orders_assigned_vendor_id', table_name='work_orders')
    op.drop_index('ix_work_orders_requested_by', table_name='work_orders')
    op.drop_index('ix_work_orders_property_id', table_name='work_orders')
    op.drop_table('work_orders')

    op.drop_table('vendors')

    op.drop_index('ix_tenants_property_id', table_name='tenants')
    op.drop_table('tenants')

    op.drop_index('ix_properties_manager_id', table_name='properties')
    op.drop_table('properties')

    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
