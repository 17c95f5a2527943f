from datetime import timedelta
import time

import structlog

from aquaflow.core.config import settings
from aquaflow.core.context import RequestContext
from aquaflow.core.database import utcnow
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.inventory_item import InventoryItem
from aquaflow.models.invoice import Invoice, InvoiceStatus
from aquaflow.models.order import Order, OrderStatus
from aquaflow.schemas.order import OrderDetail
from aquaflow.services.order_service import OrderService

logger = structlog.get_logger(__name__)

# Statuses a vendor can pick; an order never returns to pending
SELECTABLE_STATUSES = [
    OrderStatus.ACKNOWLEDGED,
    OrderStatus.CONFIRMED,
    OrderStatus.IN_TRANSIT,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
]


class OrderLifecycleService:
    @staticmethod
    def _decrement_stock(ctx: RequestContext, order: Order) -> None:
        """Take delivered quantities out of the vendor's stock, clamped at zero"""
        for line in order.items:
            if line.inventory_item_id is None:
                continue
            item = ctx.db.query(InventoryItem).filter(
                InventoryItem.id == line.inventory_item_id,
                InventoryItem.vendor_id == order.vendor_id,
            ).with_for_update().first()
            if not item:
                continue
            before = item.stock
            item.stock = max(0, item.stock - line.quantity)
            logger.info(
                "stock_decremented",
                order_id=str(order.id),
                item_id=str(item.id),
                before=before,
                after=item.stock,
            )

    @staticmethod
    @guarded("update_status")
    def update_status(ctx: RequestContext, order_id, status: OrderStatus) -> OrderDetail:
        """Set an order's status as its vendor.

        Any status may follow any other except that a cancelled order is
        frozen. The first transition to delivered decrements stock for every
        line item; the order is marked so that a repeated delivered request
        does not decrement again. Status and stock are committed together.
        """
        order = OrderService.find_vendor_order(ctx, order_id, for_update=True)
        if not order:
            raise AccessError.not_found("Order not found")

        if order.status == OrderStatus.CANCELLED:
            raise AccessError.constraint("Cancelled orders cannot change status", code="order_cancelled")

        previous = order.status
        if status == OrderStatus.DELIVERED and order.inventory_adjusted_at is None:
            OrderLifecycleService._decrement_stock(ctx, order)
            order.inventory_adjusted_at = utcnow()

        order.status = status
        ctx.db.commit()
        logger.info(
            "order_status_changed",
            order_id=str(order.id),
            previous=previous.value,
            status=status.value,
        )
        return OrderService.attach_details(ctx, [order])[0]

    @staticmethod
    def _next_invoice_code(ctx: RequestContext) -> str:
        millis = int(time.time() * 1000)
        code = f"{settings.invoice_prefix}-{millis}"
        while ctx.db.query(Invoice.id).filter(Invoice.invoice_id == code).first():
            millis += 1
            code = f"{settings.invoice_prefix}-{millis}"
        return code

    @staticmethod
    @guarded("generate_invoice")
    def generate_invoice(ctx: RequestContext, order_id) -> Invoice:
        """Persist a draft invoice for an order and link its code to the order.

        Only orders without an invoice that are not cancelled qualify.
        """
        order = OrderService.find_vendor_order(ctx, order_id, for_update=True)
        if not order:
            raise AccessError.not_found("Order not found")
        if order.status == OrderStatus.CANCELLED:
            raise AccessError.constraint("Cancelled orders cannot be invoiced", code="order_cancelled")
        if order.invoice_id:
            raise AccessError.constraint(f"Order already has invoice {order.invoice_id}", code="already_invoiced")

        generated = utcnow()
        invoice = Invoice(
            invoice_id=OrderLifecycleService._next_invoice_code(ctx),
            order_id=order.id,
            amount=order.total,
            generated_date=generated,
            due_date=generated + timedelta(days=settings.invoice_due_days),
            status=InvoiceStatus.DRAFT,
        )
        ctx.db.add(invoice)
        order.invoice_id = invoice.invoice_id
        ctx.db.commit()
        ctx.db.refresh(invoice)
        logger.info("invoice_generated", invoice_id=invoice.invoice_id, order_id=str(order.id))
        return invoice
