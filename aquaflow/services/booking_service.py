from datetime import date, timedelta
from typing import Optional

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import Result, guarded
from aquaflow.schemas.order import OrderCreate, OrderDetail
from aquaflow.services.address_service import AddressService
from aquaflow.services.cart import Cart
from aquaflow.services.inventory_service import InventoryService
from aquaflow.services.order_service import OrderService
from aquaflow.services.user_service import UserService

logger = structlog.get_logger(__name__)


class BookingError(ValueError):
    """A booking form that cannot be submitted as filled in"""


class BookingService:
    @staticmethod
    def earliest_delivery_date(today: Optional[date] = None) -> date:
        """Deliveries are booked from the day after today"""
        return (today or date.today()) + timedelta(days=1)

    @staticmethod
    @guarded("load_cart")
    def load_cart(ctx: RequestContext, area_id) -> Cart:
        """Start an empty cart over the inventory serving an area"""
        inventory = InventoryService.list_inventory_by_area(ctx, area_id)
        if inventory.error:
            raise inventory.error
        return Cart(inventory.data)

    @staticmethod
    def submit(
        ctx: RequestContext,
        cart: Cart,
        address_id,
        preferred_time: str,
        delivery_date: Optional[date] = None,
        idempotency_key: Optional[str] = None,
        today: Optional[date] = None,
        request_hash: Optional[str] = None,
    ) -> Result[OrderDetail]:
        """Turn a cart into a pending order.

        Raises BookingError when the form is incomplete. Access failures come
        back as the failed Result. The cart is cleared only on success.
        ``request_hash`` identifies the client request behind an idempotency
        key; without it the key is bound to the built order.
        """
        if not ctx.is_customer:
            raise BookingError("Customer account required")

        address = AddressService.get_address(ctx, address_id) if address_id else None
        if address is None or cart.is_empty:
            raise BookingError("Please select an address and add items to cart")
        if address.error:
            if address.is_not_found:
                raise BookingError("Please select an address and add items to cart")
            return Result(error=address.error)

        if not preferred_time or not preferred_time.strip():
            raise BookingError("Please enter your preferred delivery time")

        earliest = BookingService.earliest_delivery_date(today)
        delivery_date = delivery_date or earliest
        if delivery_date < earliest:
            raise BookingError(f"Delivery date cannot be earlier than {earliest.isoformat()}")

        vendor_id = cart.vendor_id
        if vendor_id is None:
            raise BookingError("No vendor found for this area")

        vendor = UserService.get_user(ctx, vendor_id)
        vendor_name = vendor.data.name if vendor.ok else ""

        order_data = OrderCreate(
            customer_id=ctx.user.id,
            customer_name=ctx.user.name,
            customer_phone=ctx.user.phone or "",
            customer_user_id=ctx.user.user_id,
            vendor_id=vendor_id,
            vendor_name=vendor_name,
            area_id=address.data.area_id,
            address_id=address.data.id,
            total=cart.total,
            delivery_date=delivery_date,
            preferred_time=preferred_time.strip(),
            items=cart.to_order_items(),
        )
        result = OrderService.create_order(
            ctx, order_data, idempotency_key=idempotency_key, payload_hash=request_hash
        )
        if result.ok:
            cart.clear()
            logger.info("booking_submitted", order_id=str(result.data.id), customer=ctx.user.user_id)
        return result
