from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
from uuid import UUID

from aquaflow.api.rest.errors import unwrap
from aquaflow.core.context import RequestContext, get_request_context, require_vendor
from aquaflow.schemas.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse
from aquaflow.services.inventory_service import InventoryService

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=List[InventoryItemResponse])
def list_inventory(
    vendor_id: Optional[UUID] = Query(None, description="Defaults to the calling vendor"),
    ctx: RequestContext = Depends(get_request_context),
):
    """List a vendor's inventory"""
    vendor_id = vendor_id or ctx.user_pk
    if vendor_id is None:
        raise HTTPException(status_code=400, detail="vendor_id is required")
    return unwrap(InventoryService.list_inventory_by_vendor(ctx, vendor_id))


@router.get("/area/{area_id}", response_model=List[InventoryItemResponse])
def list_inventory_by_area(area_id: UUID, ctx: RequestContext = Depends(get_request_context)):
    """List the products offered in a service area"""
    return unwrap(InventoryService.list_inventory_by_area(ctx, area_id))


@router.get("/{item_id}", response_model=InventoryItemResponse)
def get_inventory_item(item_id: UUID, ctx: RequestContext = Depends(get_request_context)):
    """Get an inventory item by ID"""
    return unwrap(InventoryService.get_inventory_item(ctx, item_id))


@router.post("", response_model=InventoryItemResponse, status_code=201)
def create_inventory_item(item_data: InventoryItemCreate, ctx: RequestContext = Depends(require_vendor)):
    """Add a product to the calling vendor's inventory"""
    return unwrap(InventoryService.create_inventory_item(ctx, item_data))


@router.patch("/{item_id}", response_model=InventoryItemResponse)
def update_inventory_item(
    item_id: UUID,
    item_data: InventoryItemUpdate,
    ctx: RequestContext = Depends(require_vendor),
):
    """Change price, stock, name or description of a product"""
    return unwrap(InventoryService.update_inventory_item(ctx, item_id, item_data))


@router.delete("/{item_id}", status_code=204)
def delete_inventory_item(item_id: UUID, ctx: RequestContext = Depends(require_vendor)):
    """Remove a product from the calling vendor's inventory"""
    unwrap(InventoryService.delete_inventory_item(ctx, item_id))
    return None
