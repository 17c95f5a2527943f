from typing import List

import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.inventory_item import InventoryItem
from aquaflow.models.service_area import ServiceArea
from aquaflow.schemas.inventory import InventoryItemCreate, InventoryItemUpdate

logger = structlog.get_logger(__name__)


class InventoryService:
    @staticmethod
    @guarded("list_inventory_by_vendor")
    def list_inventory_by_vendor(ctx: RequestContext, vendor_id) -> List[InventoryItem]:
        """List a vendor's inventory, newest first"""
        return ctx.db.query(InventoryItem).filter(
            InventoryItem.vendor_id == vendor_id
        ).order_by(InventoryItem.created_at.desc()).all()

    @staticmethod
    @guarded("list_inventory_by_area")
    def list_inventory_by_area(ctx: RequestContext, area_id) -> List[InventoryItem]:
        """List the inventory of the vendor serving an area"""
        area = ctx.db.query(ServiceArea).filter(ServiceArea.id == area_id).first()
        if not area:
            raise AccessError.not_found("Service area not found")

        return ctx.db.query(InventoryItem).filter(
            InventoryItem.vendor_id == area.vendor_id
        ).order_by(InventoryItem.created_at).all()

    @staticmethod
    @guarded("get_inventory_item")
    def get_inventory_item(ctx: RequestContext, item_id) -> InventoryItem:
        """Get inventory item by ID"""
        item = ctx.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
        if not item:
            raise AccessError.not_found("Inventory item not found")
        return item

    @staticmethod
    @guarded("create_inventory_item")
    def create_inventory_item(ctx: RequestContext, item_data: InventoryItemCreate) -> InventoryItem:
        """Create an inventory item owned by the calling vendor"""
        if not ctx.is_vendor:
            raise AccessError.policy()

        item = InventoryItem(
            vendor_id=ctx.user_pk,
            name=item_data.name,
            price=item_data.price,
            stock=item_data.stock,
            description=item_data.description,
        )
        ctx.db.add(item)
        ctx.db.commit()
        ctx.db.refresh(item)
        logger.info("inventory_item_created", item_id=str(item.id), stock=item.stock)
        return item

    @staticmethod
    @guarded("update_inventory_item")
    def update_inventory_item(ctx: RequestContext, item_id, item_data: InventoryItemUpdate) -> InventoryItem:
        """Update one of the caller's items; only fields present in the input are written"""
        item = ctx.db.query(InventoryItem).filter(
            InventoryItem.id == item_id,
            InventoryItem.vendor_id == ctx.user_pk,
        ).first()
        if not item:
            raise AccessError.not_found("Inventory item not found")

        for field, value in item_data.model_dump(exclude_unset=True).items():
            setattr(item, field, value)
        ctx.db.commit()
        ctx.db.refresh(item)
        return item

    @staticmethod
    @guarded("delete_inventory_item")
    def delete_inventory_item(ctx: RequestContext, item_id) -> bool:
        """Delete one of the caller's items. Past order lines keep their snapshot"""
        deleted = ctx.db.query(InventoryItem).filter(
            InventoryItem.id == item_id,
            InventoryItem.vendor_id == ctx.user_pk,
        ).delete(synchronize_session=False)
        ctx.db.commit()
        if not deleted:
            raise AccessError.not_found("Inventory item not found")
        return True
