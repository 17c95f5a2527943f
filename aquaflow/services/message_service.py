from typing import List

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.order import Order
from aquaflow.models.order_message import MessageSender, OrderMessage
from aquaflow.schemas.order import MessageCreate
from aquaflow.services.order_service import OrderService

logger = structlog.get_logger(__name__)


class MessageService:
    @staticmethod
    @guarded("list_order_messages")
    def list_order_messages(ctx: RequestContext, order_id) -> List[OrderMessage]:
        """List an order's messages, oldest first"""
        order = OrderService.visible_orders(ctx).filter(Order.id == order_id).first()
        if not order:
            raise AccessError.not_found("Order not found")
        return ctx.db.query(OrderMessage).filter(
            OrderMessage.order_id == order.id
        ).order_by(OrderMessage.created_at).all()

    @staticmethod
    @guarded("create_order_message")
    def create_order_message(ctx: RequestContext, order_id, message_data: MessageCreate) -> OrderMessage:
        """Append a message to an order thread as the calling customer or vendor.

        Messages are append-only; there is no edit or delete path.
        """
        order = OrderService.visible_orders(ctx).filter(Order.id == order_id).first()
        if not order:
            raise AccessError.policy()

        sender = MessageSender.VENDOR if order.vendor_id == ctx.user_pk else MessageSender.CUSTOMER
        message = OrderMessage(
            order_id=order.id,
            sender=sender,
            sender_name=ctx.user.name,
            message=message_data.message,
        )
        ctx.db.add(message)
        ctx.db.commit()
        ctx.db.refresh(message)
        logger.info("order_message_created", order_id=str(order.id), sender=sender.value)
        return message
