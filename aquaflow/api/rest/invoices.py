from fastapi import APIRouter, Depends
from typing import List
from uuid import UUID

from aquaflow.api.rest.errors import unwrap
from aquaflow.core.context import RequestContext, require_user, require_vendor
from aquaflow.schemas.invoice import InvoiceResponse, InvoiceStatusUpdate
from aquaflow.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=List[InvoiceResponse])
def list_invoices(ctx: RequestContext = Depends(require_vendor)):
    """List invoices for the calling vendor's orders"""
    return unwrap(InvoiceService.list_invoices_by_vendor(ctx, ctx.user_pk))


@router.get("/{invoice_pk}", response_model=InvoiceResponse)
def get_invoice(invoice_pk: UUID, ctx: RequestContext = Depends(require_user)):
    """Get a specific invoice by ID"""
    return unwrap(InvoiceService.get_invoice(ctx, invoice_pk))


@router.patch("/{invoice_pk}/status", response_model=InvoiceResponse)
def update_invoice_status(
    invoice_pk: UUID,
    status_data: InvoiceStatusUpdate,
    ctx: RequestContext = Depends(require_vendor),
):
    """Mark an invoice as sent or paid"""
    return unwrap(InvoiceService.update_invoice_status(ctx, invoice_pk, status_data.status))
