"""In-memory booking cart built over an inventory snapshot."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from aquaflow.schemas.inventory import InventoryItemResponse
from aquaflow.schemas.order import OrderItemInput


@dataclass
class CartLine:
    inventory_item_id: UUID
    name: str
    quantity: int
    price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Cart:
    """Selected items in first-added order, each capped at the snapshot's stock.

    Prices and stock come from the inventory as it was when the cart was
    loaded; they are not re-read before submission.
    """

    def __init__(self, inventory: Iterable) -> None:
        self._inventory: Dict[UUID, InventoryItemResponse] = {}
        for item in inventory:
            snapshot = InventoryItemResponse.model_validate(item)
            self._inventory[snapshot.id] = snapshot
        self._lines: Dict[UUID, CartLine] = {}

    @property
    def products(self) -> List[InventoryItemResponse]:
        return list(self._inventory.values())

    @property
    def vendor_id(self) -> Optional[UUID]:
        """Vendor of the snapshot; None when the area offers nothing"""
        for item in self._inventory.values():
            return item.vendor_id
        return None

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def quantity_of(self, item_id: UUID) -> int:
        line = self._lines.get(item_id)
        return line.quantity if line else 0

    def add_item(self, item_id: UUID, quantity: int = 1) -> bool:
        """Add units of an item without exceeding its stock. Returns False if nothing was added"""
        item = self._inventory.get(item_id)
        if item is None or item.stock <= 0 or quantity <= 0:
            return False

        current = self.quantity_of(item_id)
        if current >= item.stock:
            return False

        new_quantity = min(current + quantity, item.stock)
        if item_id in self._lines:
            self._lines[item_id].quantity = new_quantity
        else:
            self._lines[item_id] = CartLine(
                inventory_item_id=item.id,
                name=item.name,
                quantity=new_quantity,
                price=item.price,
            )
        return True

    def update_quantity(self, item_id: UUID, quantity: int) -> bool:
        """Set a line's quantity; zero or less removes it, more than stock is ignored"""
        item = self._inventory.get(item_id)
        if item is None:
            return False
        if quantity <= 0:
            return self._lines.pop(item_id, None) is not None
        if quantity > item.stock:
            return False
        if item_id in self._lines:
            self._lines[item_id].quantity = quantity
            return True
        return self.add_item(item_id, quantity)

    def clear(self) -> None:
        self._lines.clear()

    def to_order_items(self) -> List[OrderItemInput]:
        return [
            OrderItemInput(
                inventory_item_id=line.inventory_item_id,
                name=line.name,
                quantity=line.quantity,
                price=line.price,
            )
            for line in self._lines.values()
        ]
