from .base import Base
from .user import User
from .property import Property
from .tenant import Tenant
from .vendor import Vendor
from .work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus
from .invoice import Invoice, InvoiceStatus
from .audit_log import AuditLog

__all__ = [
    "Base",
    "User",
    "Property",
    "Tenant",
    "Vendor",
    "WorkOrder",
    "WorkOrderPriority",
    "WorkOrderStatus",
    "Invoice",
    "InvoiceStatus",
    "AuditLog",
]
