from fastapi import APIRouter, Depends, HTTPException, Header, Query
from typing import List, Optional
from uuid import UUID

from aquaflow.api.rest.errors import unwrap
from aquaflow.core.context import RequestContext, require_customer, require_user, require_vendor
from aquaflow.models.order import OrderStatus
from aquaflow.schemas.booking import BookingRequest
from aquaflow.schemas.invoice import InvoiceResponse
from aquaflow.schemas.order import MessageCreate, MessageResponse, OrderDetail, OrderStatusUpdate
from aquaflow.services.address_service import AddressService
from aquaflow.services.booking_service import BookingError, BookingService
from aquaflow.services.idempotency_service import IdempotencyService
from aquaflow.services.lifecycle_service import OrderLifecycleService
from aquaflow.services.message_service import MessageService
from aquaflow.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderDetail])
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    ctx: RequestContext = Depends(require_user),
):
    """List the caller's orders with items, messages and address, newest first"""
    if ctx.is_vendor:
        orders = unwrap(OrderService.list_orders_by_vendor(ctx, ctx.user_pk))
    else:
        orders = unwrap(OrderService.list_orders_by_customer(ctx, ctx.user_pk))
    if status:
        orders = [order for order in orders if order.status == status]
    return orders


@router.post("", response_model=OrderDetail, status_code=201)
def place_order(
    booking: BookingRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    ctx: RequestContext = Depends(require_customer),
):
    """Book a delivery from the products offered at the selected address.

    A retried request with the same Idempotency-Key and body returns the
    order created the first time, even if prices or stock changed since.
    """
    request_hash = None
    if idempotency_key:
        request_hash = IdempotencyService.hash_payload(booking)
        replayed = unwrap(OrderService.replay_order(ctx, idempotency_key, request_hash))
        if replayed:
            return replayed

    address = unwrap(AddressService.get_address(ctx, booking.address_id))
    if address.area_id is None:
        raise HTTPException(status_code=422, detail="Address is not in a service area")

    cart = unwrap(BookingService.load_cart(ctx, address.area_id))
    for line in booking.lines:
        cart.add_item(line.inventory_item_id, line.quantity)

    try:
        result = BookingService.submit(
            ctx,
            cart,
            booking.address_id,
            booking.preferred_time,
            delivery_date=booking.delivery_date,
            idempotency_key=idempotency_key,
            request_hash=request_hash,
        )
    except BookingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return unwrap(result)


@router.get("/{order_id}", response_model=OrderDetail)
def get_order(order_id: UUID, ctx: RequestContext = Depends(require_user)):
    """Get one of the caller's orders"""
    return unwrap(OrderService.get_order(ctx, order_id))


@router.patch("/{order_id}/status", response_model=OrderDetail)
def update_order_status(
    order_id: UUID,
    status_data: OrderStatusUpdate,
    ctx: RequestContext = Depends(require_vendor),
):
    """Move an order through its lifecycle; delivery takes the items out of stock"""
    return unwrap(OrderLifecycleService.update_status(ctx, order_id, status_data.status))


@router.get("/{order_id}/messages", response_model=List[MessageResponse])
def list_messages(order_id: UUID, ctx: RequestContext = Depends(require_user)):
    """Read an order's message thread"""
    return unwrap(MessageService.list_order_messages(ctx, order_id))


@router.post("/{order_id}/messages", response_model=MessageResponse, status_code=201)
def send_message(order_id: UUID, message_data: MessageCreate, ctx: RequestContext = Depends(require_user)):
    """Post to an order's message thread"""
    return unwrap(MessageService.create_order_message(ctx, order_id, message_data))


@router.post("/{order_id}/invoice", response_model=InvoiceResponse, status_code=201)
def generate_invoice(order_id: UUID, ctx: RequestContext = Depends(require_vendor)):
    """Generate a draft invoice for an order"""
    return unwrap(OrderLifecycleService.generate_invoice(ctx, order_id))
