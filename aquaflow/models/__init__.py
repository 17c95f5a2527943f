from aquaflow.models.user import User, UserType
from aquaflow.models.service_area import ServiceArea
from aquaflow.models.address import Address
from aquaflow.models.inventory_item import InventoryItem
from aquaflow.models.order import Order, OrderItem, OrderStatus
from aquaflow.models.order_message import OrderMessage, MessageSender
from aquaflow.models.invoice import Invoice, InvoiceStatus

__all__ = [
    "User",
    "UserType",
    "ServiceArea",
    "Address",
    "InventoryItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderMessage",
    "MessageSender",
    "Invoice",
    "InvoiceStatus",
]
