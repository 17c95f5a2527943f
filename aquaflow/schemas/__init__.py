from aquaflow.schemas.user import UserCreate, UserUpdate, UserResponse
from aquaflow.schemas.service_area import ServiceAreaCreate, ServiceAreaUpdate, ServiceAreaResponse
from aquaflow.schemas.address import AddressCreate, AddressUpdate, AddressResponse
from aquaflow.schemas.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse
from aquaflow.schemas.order import (
    OrderItemInput,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    MessageCreate,
    MessageResponse,
    OrderResponse,
    OrderDetail,
)
from aquaflow.schemas.invoice import InvoiceCreate, InvoiceStatusUpdate, InvoiceResponse
from aquaflow.schemas.booking import BookingLine, BookingRequest

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "ServiceAreaCreate",
    "ServiceAreaUpdate",
    "ServiceAreaResponse",
    "AddressCreate",
    "AddressUpdate",
    "AddressResponse",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryItemResponse",
    "OrderItemInput",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "MessageCreate",
    "MessageResponse",
    "OrderResponse",
    "OrderDetail",
    "InvoiceCreate",
    "InvoiceStatusUpdate",
    "InvoiceResponse",
    "BookingLine",
    "BookingRequest",
]
