from sqlalchemy import false, or_
from typing import List

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.invoice import Invoice, InvoiceStatus
from aquaflow.models.order import Order
from aquaflow.schemas.invoice import InvoiceCreate
from aquaflow.services.order_service import OrderService

logger = structlog.get_logger(__name__)


class InvoiceService:
    @staticmethod
    def _visible_invoices(ctx: RequestContext):
        query = ctx.db.query(Invoice).join(Order, Invoice.order_id == Order.id)
        if ctx.user_pk is None:
            return query.filter(false())
        return query.filter(or_(Order.customer_id == ctx.user_pk, Order.vendor_id == ctx.user_pk))

    @staticmethod
    @guarded("list_invoices_by_vendor")
    def list_invoices_by_vendor(ctx: RequestContext, vendor_id) -> List[Invoice]:
        """List invoices for a vendor's orders, newest first"""
        return InvoiceService._visible_invoices(ctx).filter(
            Order.vendor_id == vendor_id
        ).order_by(Invoice.created_at.desc()).all()

    @staticmethod
    @guarded("get_invoice")
    def get_invoice(ctx: RequestContext, invoice_pk) -> Invoice:
        """Get invoice by ID, visible to the order's customer and vendor"""
        invoice = InvoiceService._visible_invoices(ctx).filter(Invoice.id == invoice_pk).first()
        if not invoice:
            raise AccessError.not_found("Invoice not found")
        return invoice

    @staticmethod
    @guarded("create_invoice")
    def create_invoice(ctx: RequestContext, invoice_data: InvoiceCreate) -> Invoice:
        """Create an invoice for one of the caller's orders.

        Low-level write with a caller-chosen code; OrderLifecycleService
        generates codes for the vendor flow. The order is linked to the code
        unless it already carries one, and cancelled orders are refused.
        """
        order = OrderService.find_vendor_order(ctx, invoice_data.order_id)
        if not order:
            raise AccessError.policy()
        OrderService._ensure_not_cancelled(order)

        invoice = Invoice(
            invoice_id=invoice_data.invoice_id,
            order_id=invoice_data.order_id,
            amount=invoice_data.amount,
            due_date=invoice_data.due_date,
            status=invoice_data.status,
        )
        ctx.db.add(invoice)
        if not order.invoice_id:
            order.invoice_id = invoice.invoice_id
        ctx.db.commit()
        ctx.db.refresh(invoice)
        logger.info("invoice_created", invoice_id=invoice.invoice_id, order_id=str(invoice.order_id))
        return invoice

    @staticmethod
    @guarded("update_invoice_status")
    def update_invoice_status(ctx: RequestContext, invoice_pk, status: InvoiceStatus) -> Invoice:
        """Move an invoice between draft, sent and paid"""
        invoice = InvoiceService._visible_invoices(ctx).filter(
            Invoice.id == invoice_pk,
            Order.vendor_id == ctx.user_pk,
        ).first()
        if not invoice:
            raise AccessError.not_found("Invoice not found")

        invoice.status = status
        ctx.db.commit()
        ctx.db.refresh(invoice)
        return invoice
