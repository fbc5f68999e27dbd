from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.invoice import InvoiceStatus


class InvoiceCreate(BaseModel):
    invoice_number: str = Field(min_length=1, max_length=50)
    tenant_id: UUID
    property_id: UUID
    total_amount: Decimal = Field(gt=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    due_date: date

    @model_validator(mode="after")
    def check_paid_amount(self):
        if self.paid_amount > self.total_amount:
            raise ValueError("paid_amount cannot exceed total_amount")
        return self


class InvoiceRead(BaseModel):
    id: UUID
    invoice_number: str
    tenant_id: UUID
    property_id: UUID
    total_amount: Decimal
    paid_amount: Decimal
    status: InvoiceStatus
    due_date: date
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvoiceReport(BaseModel):
    """Aggregate over the invoices visible to the caller."""
    invoice_count: int
    total_invoiced: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    overdue_count: int
