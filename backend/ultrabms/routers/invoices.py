from datetime import date
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ..auth.dependencies import AuthorizationContext, TargetLoader, require
from ..auth.principal import ResourceRef
from ..auth.requirements import Permission
from ..dependencies import get_invoice_port
from ..domain.ports.invoice import InvoiceData, InvoicePort
from ..errors import NotFoundError
from ..models.invoice import InvoiceStatus
from ..schemas.invoice import InvoiceCreate, InvoiceRead, InvoiceReport

router = APIRouter(prefix="/invoices", tags=["invoices"])

_SETTLED = frozenset({InvoiceStatus.PAID.value, InvoiceStatus.CANCELLED.value})


def _ref(invoice: InvoiceData) -> ResourceRef:
    return ResourceRef.for_invoice(invoice.id, None, property_id=invoice.property_id)


def invoice_target(
    invoice_id: UUID,
    invoice_port: InvoicePort = Depends(get_invoice_port),
) -> TargetLoader:
    async def load() -> ResourceRef:
        invoice = await invoice_port.get(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice not found")
        return _ref(invoice)

    return load


def build_report(invoices: list[InvoiceData], today: date | None = None) -> InvoiceReport:
    today = today or date.today()
    total = sum((invoice.total_amount for invoice in invoices), Decimal("0"))
    paid = sum((invoice.paid_amount for invoice in invoices), Decimal("0"))
    overdue = sum(
        1
        for invoice in invoices
        if invoice.status == InvoiceStatus.OVERDUE.value
        or (invoice.status not in _SETTLED and invoice.due_date < today)
    )
    return InvoiceReport(
        invoice_count=len(invoices),
        total_invoiced=total,
        total_paid=paid,
        total_outstanding=total - paid,
        overdue_count=overdue,
    )


@router.get("", response_model=list[InvoiceRead])
async def list_invoices(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthorizationContext = Depends(require(Permission("financial:read"))),
    invoice_port: InvoicePort = Depends(get_invoice_port),
) -> list[InvoiceRead]:
    rows = await invoice_port.list(auth.scope_filter, limit, offset)
    return [InvoiceRead.model_validate(row) for row in auth.filter(rows, _ref)]


@router.get("/report", response_model=InvoiceReport)
async def invoice_report(
    auth: AuthorizationContext = Depends(require(Permission("financial:report"))),
    invoice_port: InvoicePort = Depends(get_invoice_port),
) -> InvoiceReport:
    rows = await invoice_port.list_all(auth.scope_filter)
    return build_report(auth.filter(rows, _ref))


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(
    invoice_id: UUID,
    _: AuthorizationContext = Depends(
        require(Permission("financial:read"), target=invoice_target)
    ),
    invoice_port: InvoicePort = Depends(get_invoice_port),
) -> InvoiceRead:
    invoice = await invoice_port.get(invoice_id)
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return InvoiceRead.model_validate(invoice)


@router.post("", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreate,
    _: AuthorizationContext = Depends(require(Permission("financial:create"))),
    invoice_port: InvoicePort = Depends(get_invoice_port),
) -> InvoiceRead:
    return InvoiceRead.model_validate(await invoice_port.create(payload.model_dump()))


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("financial:delete"))),
    invoice_port: InvoicePort = Depends(get_invoice_port),
) -> None:
    if not await invoice_port.delete(invoice_id):
        raise NotFoundError("Invoice not found")
