from pydantic import Field, field_validator
from datetime import date, datetime
from typing import List, Optional
from decimal import Decimal
from uuid import UUID

from aquaflow.models.order import OrderStatus
from aquaflow.models.order_message import MessageSender
from aquaflow.schemas.address import AddressResponse
from aquaflow.schemas.base import AppModel, non_blank


class OrderItemInput(AppModel):
    inventory_item_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., gt=0, description="Units ordered (positive)")
    price: Decimal = Field(..., ge=0, description="Unit price snapshot at order time")


class OrderCreate(AppModel):
    customer_id: UUID
    customer_name: str
    customer_phone: str = ""
    customer_user_id: str
    vendor_id: UUID
    vendor_name: str = ""
    area_id: Optional[UUID] = None
    address_id: UUID
    total: Decimal = Field(..., ge=0)
    delivery_date: date
    preferred_time: str = Field(..., min_length=1, max_length=255)
    items: List[OrderItemInput] = Field(..., min_length=1)

    @field_validator('preferred_time')
    @classmethod
    def validate_preferred_time(cls, v: str) -> str:
        """Validate preferred time is not just whitespace"""
        return non_blank(v, "Preferred time")


class OrderStatusUpdate(AppModel):
    status: OrderStatus


class OrderItemResponse(AppModel):
    id: UUID
    inventory_item_id: Optional[UUID]
    name: str
    quantity: int
    price: Decimal


class MessageCreate(AppModel):
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator('message')
    @classmethod
    def validate_message(cls, v: str) -> str:
        """Validate message is not just whitespace"""
        return non_blank(v, "Message")


class MessageResponse(AppModel):
    id: UUID
    order_id: Optional[UUID]
    sender: MessageSender
    sender_name: str
    message: str
    created_at: datetime


class OrderResponse(AppModel):
    id: UUID
    customer_id: Optional[UUID]
    customer_name: str
    customer_phone: str
    customer_user_id: str
    vendor_id: Optional[UUID]
    vendor_name: str
    area_id: Optional[UUID]
    address_id: Optional[UUID]
    total: Decimal
    status: OrderStatus
    order_date: datetime
    delivery_date: date
    preferred_time: str
    invoice_id: Optional[str]
    created_at: datetime


class OrderDetail(OrderResponse):
    """An order joined with its items, messages and delivery address"""

    items: List[OrderItemResponse] = []
    messages: List[MessageResponse] = []
    address: Optional[AddressResponse] = None
