import uuid
from decimal import Decimal
from fastapi import status

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import ROW_LEVEL_SECURITY
from aquaflow.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from aquaflow.services.inventory_service import InventoryService
from aquaflow.services.order_service import OrderService


def test_list_inventory_by_area(anon_ctx, area, inventory):
    """Test that an area lists the products of the vendor serving it"""
    result = InventoryService.list_inventory_by_area(anon_ctx, area.id)
    assert result.ok
    assert {item.name for item in result.data} == {"20L Bottle", "Dispenser"}


def test_list_inventory_by_area_without_products(anon_ctx, area):
    """Test that an area whose vendor has no products lists nothing"""
    result = InventoryService.list_inventory_by_area(anon_ctx, area.id)
    assert result.ok
    assert result.data == []


def test_list_inventory_by_unknown_area(anon_ctx):
    """Test that a missing area is reported as not found"""
    assert InventoryService.list_inventory_by_area(anon_ctx, uuid.uuid4()).is_not_found


def test_list_inventory_by_area_endpoint(client, area, inventory):
    """Test the area product listing over REST"""
    response = client.get(f"/api/inventory/area/{area.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 2
    bottle = next(item for item in data if item["name"] == "20L Bottle")
    assert Decimal(bottle["price"]) == Decimal("2.50")
    assert bottle["stock"] == 10


def test_list_own_inventory(client, vendor_headers, inventory):
    """Test that the vendor filter defaults to the caller"""
    response = client.get("/api/inventory", headers=vendor_headers)
    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 2


def test_list_inventory_requires_vendor(client):
    """Test that an anonymous listing needs an explicit vendor"""
    response = client.get("/api/inventory")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_inventory_item(client, vendor, vendor_headers):
    """Test adding a product"""
    response = client.post(
        "/api/inventory",
        json={"name": "5L Jug", "price": "1.25", "stock": 40, "description": "Handy size"},
        headers=vendor_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "5L Jug"
    assert data["vendorId"] == str(vendor.id)
    assert Decimal(data["price"]) == Decimal("1.25")
    assert data["stock"] == 40


def test_create_inventory_item_negative_price(client, vendor_headers):
    """Test that negative prices are rejected"""
    response = client.post(
        "/api/inventory",
        json={"name": "5L Jug", "price": "-1.00", "stock": 1},
        headers=vendor_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_inventory_item_negative_stock(client, vendor_headers):
    """Test that negative stock is rejected"""
    response = client.post(
        "/api/inventory",
        json={"name": "5L Jug", "price": "1.00", "stock": -3},
        headers=vendor_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_inventory_item_as_customer(client, customer_headers):
    """Test that customers cannot add products over REST"""
    response = client.post(
        "/api/inventory",
        json={"name": "5L Jug", "price": "1.00", "stock": 1},
        headers=customer_headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_create_inventory_item_policy(customer_ctx):
    """Test that the ownership policy rejects non-vendor inserts"""
    result = InventoryService.create_inventory_item(
        customer_ctx, InventoryItemCreate(name="5L Jug", price=Decimal("1.00"), stock=1)
    )
    assert result.error.code == ROW_LEVEL_SECURITY


def test_partial_update_keeps_other_fields(vendor_ctx, inventory):
    """Test that a stock update leaves the price alone"""
    bottle = inventory[0]
    result = InventoryService.update_inventory_item(vendor_ctx, bottle.id, InventoryItemUpdate(stock=25))
    assert result.ok
    assert result.data.stock == 25
    assert result.data.price == Decimal("2.50")
    assert result.data.name == "20L Bottle"


def test_update_other_vendors_item(db, other_vendor, inventory):
    """Test that another vendor's products are not visible for writes"""
    ctx = RequestContext(db=db, user=other_vendor)
    result = InventoryService.update_inventory_item(ctx, inventory[0].id, InventoryItemUpdate(stock=0))
    assert result.is_not_found


def test_delete_item_keeps_order_snapshot(vendor_ctx, customer_ctx, inventory, order):
    """Test that past order lines survive the product's deletion"""
    assert InventoryService.delete_inventory_item(vendor_ctx, inventory[0].id).ok

    detail = OrderService.get_order(customer_ctx, order.id).data
    assert len(detail.items) == 1
    assert detail.items[0].inventory_item_id is None
    assert detail.items[0].name == "20L Bottle"
    assert detail.items[0].price == Decimal("2.50")


def test_delete_inventory_item_endpoint(client, vendor_headers, inventory):
    """Test removing a product"""
    item_id = inventory[1].id
    response = client.delete(f"/api/inventory/{item_id}", headers=vendor_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"/api/inventory/{item_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_inventory_item_with_null_is_rejected(client, vendor_headers, inventory):
    """Test that price, stock and name cannot be cleared"""
    for field in ("price", "stock", "name", "description"):
        response = client.patch(f"/api/inventory/{inventory[0].id}", json={field: None}, headers=vendor_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
