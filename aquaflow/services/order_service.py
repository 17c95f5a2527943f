from sqlalchemy import false, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Callable, Dict, List, Optional, TypeVar
import uuid

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.address import Address
from aquaflow.models.order import Order, OrderItem, OrderStatus
from aquaflow.models.order_message import OrderMessage
from aquaflow.schemas.address import AddressResponse
from aquaflow.schemas.order import (
    MessageResponse,
    OrderCreate,
    OrderDetail,
    OrderItemResponse,
    OrderResponse,
)
from aquaflow.services.idempotency_service import IdempotencyService

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class OrderService:
    @staticmethod
    def visible_orders(ctx: RequestContext):
        """Orders the caller may read: as the customer or as the vendor"""
        if ctx.user_pk is None:
            return ctx.db.query(Order).filter(false())
        return ctx.db.query(Order).filter(
            or_(Order.customer_id == ctx.user_pk, Order.vendor_id == ctx.user_pk)
        )

    @staticmethod
    def find_vendor_order(ctx: RequestContext, order_id, for_update: bool = False) -> Optional[Order]:
        """Order the caller may update, i.e. one where the caller is the vendor"""
        query = ctx.db.query(Order).filter(Order.id == order_id, Order.vendor_id == ctx.user_pk)
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def _subread(ctx: RequestContext, name: str, read: Callable[[], T], default: T) -> T:
        """Run one sub-read of a composite read, degrading to ``default`` on failure"""
        try:
            return read()
        except SQLAlchemyError:
            ctx.db.rollback()
            logger.warning("composite_subread_failed", subread=name, exc_info=True)
            return default

    @staticmethod
    def attach_details(ctx: RequestContext, orders: List[Order]) -> List[OrderDetail]:
        """Join orders with their items, messages and delivery address.

        Items, messages and addresses are each fetched once for the whole
        batch of orders. A failing sub-read leaves that field empty on every
        order instead of failing the read.
        """
        if not orders:
            return []

        order_ids = [order.id for order in orders]
        address_ids = [order.address_id for order in orders if order.address_id is not None]

        items = OrderService._subread(
            ctx,
            "order_items",
            lambda: ctx.db.query(OrderItem).filter(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.created_at).all(),
            [],
        )
        messages = OrderService._subread(
            ctx,
            "order_messages",
            lambda: ctx.db.query(OrderMessage).filter(OrderMessage.order_id.in_(order_ids))
            .order_by(OrderMessage.created_at).all(),
            [],
        )
        addresses = OrderService._subread(
            ctx,
            "addresses",
            lambda: ctx.db.query(Address).filter(Address.id.in_(address_ids)).all() if address_ids else [],
            [],
        )

        items_by_order: Dict[uuid.UUID, List[OrderItemResponse]] = {}
        for item in items:
            items_by_order.setdefault(item.order_id, []).append(OrderItemResponse.model_validate(item))

        messages_by_order: Dict[uuid.UUID, List[MessageResponse]] = {}
        for message in messages:
            messages_by_order.setdefault(message.order_id, []).append(MessageResponse.model_validate(message))

        address_by_id = {address.id: AddressResponse.model_validate(address) for address in addresses}

        return [
            OrderDetail(
                **OrderResponse.model_validate(order).model_dump(),
                items=items_by_order.get(order.id, []),
                messages=messages_by_order.get(order.id, []),
                address=address_by_id.get(order.address_id),
            )
            for order in orders
        ]

    @staticmethod
    @guarded("list_orders_by_customer")
    def list_orders_by_customer(ctx: RequestContext, customer_id) -> List[OrderDetail]:
        """List a customer's orders with details, newest first"""
        orders = OrderService.visible_orders(ctx).filter(
            Order.customer_id == customer_id
        ).order_by(Order.created_at.desc()).all()
        return OrderService.attach_details(ctx, orders)

    @staticmethod
    @guarded("list_orders_by_vendor")
    def list_orders_by_vendor(ctx: RequestContext, vendor_id) -> List[OrderDetail]:
        """List a vendor's orders with details, newest first"""
        orders = OrderService.visible_orders(ctx).filter(
            Order.vendor_id == vendor_id
        ).order_by(Order.created_at.desc()).all()
        return OrderService.attach_details(ctx, orders)

    @staticmethod
    @guarded("get_order")
    def get_order(ctx: RequestContext, order_id) -> OrderDetail:
        """Get one order with details"""
        order = OrderService.visible_orders(ctx).filter(Order.id == order_id).first()
        if not order:
            raise AccessError.not_found("Order not found")
        return OrderService.attach_details(ctx, [order])[0]

    @staticmethod
    def _replay(ctx: RequestContext, idempotency_key: str, payload_hash: str) -> Optional[OrderDetail]:
        """Order already created under this key, or None when the key is unused.

        A key recorded for a different payload is a conflict.
        """
        record = IdempotencyService.find(ctx.db, ctx.user_pk, idempotency_key)
        if not record:
            return None
        if record.payload_hash != payload_hash:
            raise AccessError.constraint(
                "Idempotency key reused with different payload", code="idempotency_conflict"
            )
        order = OrderService.visible_orders(ctx).filter(Order.id == record.order_id).first()
        if not order:
            return None
        logger.info("order_replayed", order_id=str(order.id), idempotency_key=idempotency_key)
        return OrderService.attach_details(ctx, [order])[0]

    @staticmethod
    @guarded("replay_order")
    def replay_order(ctx: RequestContext, idempotency_key: str, payload_hash: str) -> Optional[OrderDetail]:
        """Look a submission key up before any order is built from current inventory"""
        if ctx.user_pk is None:
            raise AccessError.policy()
        return OrderService._replay(ctx, idempotency_key, payload_hash)

    @staticmethod
    @guarded("create_order")
    def create_order(
        ctx: RequestContext,
        order_data: OrderCreate,
        idempotency_key: Optional[str] = None,
        payload_hash: Optional[str] = None,
    ) -> OrderDetail:
        """Create an order and its line items in one transaction.

        With an idempotency key, replaying the same payload returns the order
        created by the first call; reusing the key for a different payload is
        rejected. ``payload_hash`` defaults to a digest of ``order_data``;
        callers that build the order from a client request pass the digest of
        that request instead.
        """
        if ctx.user_pk is None or order_data.customer_id != ctx.user_pk:
            raise AccessError.policy()

        payload_hash = payload_hash or IdempotencyService.hash_payload(order_data)
        if idempotency_key:
            replayed = OrderService._replay(ctx, idempotency_key, payload_hash)
            if replayed:
                return replayed

        order = Order(
            id=uuid.uuid4(),
            customer_id=order_data.customer_id,
            customer_name=order_data.customer_name,
            customer_phone=order_data.customer_phone,
            customer_user_id=order_data.customer_user_id,
            vendor_id=order_data.vendor_id,
            vendor_name=order_data.vendor_name,
            area_id=order_data.area_id,
            address_id=order_data.address_id,
            total=order_data.total,
            status=OrderStatus.PENDING,
            delivery_date=order_data.delivery_date,
            preferred_time=order_data.preferred_time,
        )
        ctx.db.add(order)
        ctx.db.flush()

        for item in order_data.items:
            ctx.db.add(OrderItem(
                order_id=order.id,
                inventory_item_id=item.inventory_item_id,
                name=item.name,
                quantity=item.quantity,
                price=item.price,
            ))

        if idempotency_key:
            IdempotencyService.remember(ctx.db, ctx.user_pk, idempotency_key, payload_hash, order.id)

        try:
            ctx.db.commit()
        except IntegrityError:
            # A concurrent submission with the same key committed first
            ctx.db.rollback()
            replayed = OrderService._replay(ctx, idempotency_key, payload_hash) if idempotency_key else None
            if replayed:
                return replayed
            raise

        logger.info(
            "order_created",
            order_id=str(order.id),
            vendor_id=str(order.vendor_id),
            items=len(order_data.items),
            total=str(order_data.total),
        )
        return OrderService.attach_details(ctx, [order])[0]

    @staticmethod
    def _ensure_not_cancelled(order: Order) -> None:
        if order.status == OrderStatus.CANCELLED:
            raise AccessError.constraint("Cancelled orders cannot change", code="order_cancelled")

    @staticmethod
    @guarded("update_order_status")
    def update_order_status(ctx: RequestContext, order_id, status: OrderStatus) -> Order:
        """Write an order's status column without lifecycle side effects.

        Low-level write: stock is not touched. Use OrderLifecycleService for
        vendor-driven transitions. A cancelled order stays frozen here too.
        """
        order = OrderService.find_vendor_order(ctx, order_id)
        if not order:
            raise AccessError.not_found("Order not found")
        OrderService._ensure_not_cancelled(order)
        order.status = status
        ctx.db.commit()
        ctx.db.refresh(order)
        return order

    @staticmethod
    @guarded("update_order_invoice_id")
    def update_order_invoice_id(ctx: RequestContext, order_id, invoice_id: str) -> Order:
        """Link an invoice display code to an order (low-level write, no invoice row is created)"""
        order = OrderService.find_vendor_order(ctx, order_id)
        if not order:
            raise AccessError.not_found("Order not found")
        OrderService._ensure_not_cancelled(order)
        order.invoice_id = invoice_id
        ctx.db.commit()
        ctx.db.refresh(order)
        return order
