import uuid

from ..auth.matrix import Role
from ..auth.principal import Principal
from ..domain.ports.user import UserPort


async def resolve_principal(user_port: UserPort, user_id: uuid.UUID) -> Principal | None:
    """Build the request principal for ``user_id``.

    Returns None for unknown or inactive users. Only the lookups relevant to
    the user's role are performed.
    """
    user = await user_port.get(user_id)
    if user is None or not user.is_active:
        return None

    role = Role(user.role)
    assigned: frozenset[uuid.UUID] = frozenset()
    tenant_id = None
    vendor_id = None

    if role is Role.PROPERTY_MANAGER:
        assigned = await user_port.assigned_property_ids(user.id)
    elif role is Role.TENANT:
        tenant_id = await user_port.tenant_id_for(user.id)
    elif role is Role.VENDOR:
        vendor_id = await user_port.vendor_id_for(user.id)

    return Principal(
        user_id=user.id,
        role=role,
        assigned_property_ids=assigned,
        tenant_id=tenant_id,
        vendor_id=vendor_id,
        email=user.email,
    )
