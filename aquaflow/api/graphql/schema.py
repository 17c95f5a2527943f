import strawberry
from strawberry.types import Info
from typing import List, Optional
from decimal import Decimal
from datetime import date, datetime
from uuid import UUID

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import Result
from aquaflow.models.order import OrderStatus
from aquaflow.schemas.order import MessageCreate, OrderDetail
from aquaflow.services.inventory_service import InventoryService
from aquaflow.services.lifecycle_service import OrderLifecycleService
from aquaflow.services.message_service import MessageService
from aquaflow.services.order_service import OrderService
from aquaflow.services.service_area_service import ServiceAreaService


def _request_context(info: Info) -> RequestContext:
    return info.context["request_context"]


def _require_user(info: Info) -> RequestContext:
    ctx = _request_context(info)
    if ctx.user is None:
        raise ValueError("Authentication required")
    return ctx


def _unwrap(result: Result):
    if not result.ok:
        raise ValueError(result.error.message)
    return result.data


# GraphQL Types
@strawberry.type
class ServiceArea:
    id: UUID
    name: str
    vendor_id: Optional[UUID]
    vendor_name: str
    created_at: datetime

    @classmethod
    def from_model(cls, area):
        return cls(
            id=area.id,
            name=area.name,
            vendor_id=area.vendor_id,
            vendor_name=area.vendor_name,
            created_at=area.created_at,
        )


@strawberry.type
class InventoryItem:
    id: UUID
    vendor_id: Optional[UUID]
    name: str
    description: str
    price: Decimal
    stock: int

    @classmethod
    def from_model(cls, item):
        return cls(
            id=item.id,
            vendor_id=item.vendor_id,
            name=item.name,
            description=item.description,
            price=item.price,
            stock=item.stock,
        )


@strawberry.type
class OrderItem:
    id: UUID
    inventory_item_id: Optional[UUID]
    name: str
    quantity: int
    price: Decimal


@strawberry.type
class OrderMessage:
    id: UUID
    sender: str
    sender_name: str
    message: str
    created_at: datetime

    @classmethod
    def from_model(cls, message):
        return cls(
            id=message.id,
            sender=message.sender.value,
            sender_name=message.sender_name,
            message=message.message,
            created_at=message.created_at,
        )


@strawberry.type
class Address:
    id: UUID
    label: str
    street: str
    city: str
    state: str
    zip_code: str


@strawberry.type
class Order:
    id: UUID
    customer_name: str
    customer_phone: str
    vendor_name: str
    total: Decimal
    status: str
    order_date: datetime
    delivery_date: date
    preferred_time: str
    invoice_id: Optional[str]
    items: List[OrderItem]
    messages: List[OrderMessage]
    address: Optional[Address]

    @classmethod
    def from_detail(cls, detail: OrderDetail):
        address = None
        if detail.address:
            address = Address(
                id=detail.address.id,
                label=detail.address.label,
                street=detail.address.street,
                city=detail.address.city,
                state=detail.address.state,
                zip_code=detail.address.zip_code,
            )
        return cls(
            id=detail.id,
            customer_name=detail.customer_name,
            customer_phone=detail.customer_phone,
            vendor_name=detail.vendor_name,
            total=detail.total,
            status=detail.status.value,
            order_date=detail.order_date,
            delivery_date=detail.delivery_date,
            preferred_time=detail.preferred_time,
            invoice_id=detail.invoice_id,
            items=[
                OrderItem(
                    id=i.id,
                    inventory_item_id=i.inventory_item_id,
                    name=i.name,
                    quantity=i.quantity,
                    price=i.price,
                )
                for i in detail.items
            ],
            messages=[OrderMessage.from_model(m) for m in detail.messages],
            address=address,
        )


@strawberry.type
class Invoice:
    id: UUID
    invoice_id: str
    order_id: Optional[UUID]
    amount: Decimal
    due_date: datetime
    status: str

    @classmethod
    def from_model(cls, invoice):
        return cls(
            id=invoice.id,
            invoice_id=invoice.invoice_id,
            order_id=invoice.order_id,
            amount=invoice.amount,
            due_date=invoice.due_date,
            status=invoice.status.value,
        )


# Queries
@strawberry.type
class Query:
    @strawberry.field
    def service_areas(self, info: Info) -> List[ServiceArea]:
        ctx = _request_context(info)
        areas = _unwrap(ServiceAreaService.list_service_areas(ctx))
        return [ServiceArea.from_model(a) for a in areas]

    @strawberry.field
    def inventory_by_area(self, info: Info, area_id: UUID) -> List[InventoryItem]:
        ctx = _request_context(info)
        items = _unwrap(InventoryService.list_inventory_by_area(ctx, area_id))
        return [InventoryItem.from_model(i) for i in items]

    @strawberry.field
    def orders(self, info: Info, status: Optional[str] = None) -> List[Order]:
        ctx = _require_user(info)
        if ctx.is_vendor:
            details = _unwrap(OrderService.list_orders_by_vendor(ctx, ctx.user_pk))
        else:
            details = _unwrap(OrderService.list_orders_by_customer(ctx, ctx.user_pk))

        if status:
            wanted = OrderStatus(status)
            details = [d for d in details if d.status == wanted]
        return [Order.from_detail(d) for d in details]

    @strawberry.field
    def order(self, info: Info, order_id: UUID) -> Order:
        ctx = _require_user(info)
        return Order.from_detail(_unwrap(OrderService.get_order(ctx, order_id)))


# Mutations
@strawberry.type
class Mutation:
    @strawberry.mutation
    def update_order_status(self, info: Info, order_id: UUID, status: str) -> Order:
        ctx = _require_user(info)
        if not ctx.is_vendor:
            raise ValueError("Vendor account required")
        detail = _unwrap(OrderLifecycleService.update_status(ctx, order_id, OrderStatus(status)))
        return Order.from_detail(detail)

    @strawberry.mutation
    def send_message(self, info: Info, order_id: UUID, message: str) -> OrderMessage:
        ctx = _require_user(info)
        created = _unwrap(MessageService.create_order_message(ctx, order_id, MessageCreate(message=message)))
        return OrderMessage.from_model(created)

    @strawberry.mutation
    def generate_invoice(self, info: Info, order_id: UUID) -> Invoice:
        ctx = _require_user(info)
        if not ctx.is_vendor:
            raise ValueError("Vendor account required")
        return Invoice.from_model(_unwrap(OrderLifecycleService.generate_invoice(ctx, order_id)))


# Create schema
schema = strawberry.Schema(query=Query, mutation=Mutation)
