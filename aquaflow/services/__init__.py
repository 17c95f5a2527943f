from aquaflow.services.user_service import UserService
from aquaflow.services.service_area_service import ServiceAreaService
from aquaflow.services.address_service import AddressService
from aquaflow.services.inventory_service import InventoryService
from aquaflow.services.order_service import OrderService
from aquaflow.services.message_service import MessageService
from aquaflow.services.invoice_service import InvoiceService
from aquaflow.services.lifecycle_service import OrderLifecycleService, SELECTABLE_STATUSES
from aquaflow.services.booking_service import BookingService, BookingError
from aquaflow.services.cart import Cart, CartLine

__all__ = [
    "UserService",
    "ServiceAreaService",
    "AddressService",
    "InventoryService",
    "OrderService",
    "MessageService",
    "InvoiceService",
    "OrderLifecycleService",
    "SELECTABLE_STATUSES",
    "BookingService",
    "BookingError",
    "Cart",
    "CartLine",
]
