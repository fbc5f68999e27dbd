from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from .catalog import Resource
from .matrix import Role


@dataclass(frozen=True)
class Principal:
    """The authenticated actor for one request.

    Built once per request from the bearer token and the persisted user row,
    and discarded when the request ends.
    """

    user_id: uuid.UUID
    role: Role
    assigned_property_ids: frozenset[uuid.UUID] = field(default_factory=frozenset)
    tenant_id: uuid.UUID | None = None
    vendor_id: uuid.UUID | None = None
    email: str | None = None


@dataclass(frozen=True)
class ResourceRef:
    """Ownership and assignment references of a protected entity."""

    resource: Resource
    id: uuid.UUID | None = None
    owner_id: uuid.UUID | None = None
    property_id: uuid.UUID | None = None
    assigned_vendor_id: uuid.UUID | None = None

    @classmethod
    def for_property(cls, property_id: uuid.UUID) -> "ResourceRef":
        return cls(Resource.PROPERTY, id=property_id, property_id=property_id)

    @classmethod
    def for_tenant(
        cls,
        tenant_id: uuid.UUID,
        owner_id: uuid.UUID | None,
        property_id: uuid.UUID | None = None,
    ) -> "ResourceRef":
        return cls(Resource.TENANT, id=tenant_id, owner_id=owner_id, property_id=property_id)

    @classmethod
    def for_work_order(
        cls,
        work_order_id: uuid.UUID,
        requester_id: uuid.UUID | None,
        property_id: uuid.UUID | None = None,
        assigned_vendor_id: uuid.UUID | None = None,
    ) -> "ResourceRef":
        return cls(
            Resource.WORKORDER,
            id=work_order_id,
            owner_id=requester_id,
            property_id=property_id,
            assigned_vendor_id=assigned_vendor_id,
        )

    @classmethod
    def for_invoice(
        cls,
        invoice_id: uuid.UUID,
        owner_id: uuid.UUID | None,
        property_id: uuid.UUID | None = None,
    ) -> "ResourceRef":
        return cls(Resource.FINANCIAL, id=invoice_id, owner_id=owner_id, property_id=property_id)

    @classmethod
    def for_vendor(cls, vendor_id: uuid.UUID, owner_id: uuid.UUID | None = None) -> "ResourceRef":
        return cls(Resource.VENDOR, id=vendor_id, owner_id=owner_id)
