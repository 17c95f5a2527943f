import pytest
import uuid
from datetime import date, timedelta
from decimal import Decimal

from aquaflow.services.booking_service import BookingError, BookingService
from aquaflow.services.cart import Cart


@pytest.fixture
def cart(inventory):
    return Cart(inventory)


def test_add_item_accumulates_up_to_stock(cart, inventory):
    """Test that repeated adds stop at the snapshot's stock"""
    dispenser = inventory[1]
    assert cart.add_item(dispenser.id, 2)
    assert cart.add_item(dispenser.id, 2)
    assert cart.quantity_of(dispenser.id) == 3
    assert not cart.add_item(dispenser.id)
    assert cart.quantity_of(dispenser.id) == 3


def test_add_unknown_item(cart):
    """Test that items outside the snapshot cannot be added"""
    assert not cart.add_item(uuid.uuid4())
    assert cart.is_empty


def test_add_out_of_stock_item(db, vendor, inventory):
    """Test that an item with no stock cannot be added"""
    inventory[1].stock = 0
    db.commit()

    cart = Cart(inventory)
    assert not cart.add_item(inventory[1].id)
    assert cart.is_empty


def test_update_quantity(cart, inventory):
    """Test setting, rejecting and removing quantities"""
    bottle = inventory[0]
    cart.add_item(bottle.id)

    assert cart.update_quantity(bottle.id, 7)
    assert cart.quantity_of(bottle.id) == 7

    assert not cart.update_quantity(bottle.id, 11)
    assert cart.quantity_of(bottle.id) == 7

    assert cart.update_quantity(bottle.id, 0)
    assert cart.quantity_of(bottle.id) == 0
    assert cart.is_empty


def test_update_quantity_of_unknown_item(cart):
    """Test that unknown items are ignored"""
    assert not cart.update_quantity(uuid.uuid4(), 2)


def test_lines_keep_first_added_order(cart, inventory):
    """Test that lines are listed in the order they were first added"""
    cart.add_item(inventory[1].id)
    cart.add_item(inventory[0].id)
    cart.add_item(inventory[1].id)
    assert [line.name for line in cart.lines] == ["Dispenser", "20L Bottle"]


def test_total_and_order_items(cart, inventory, vendor):
    """Test the cart total and the order lines built from it"""
    cart.add_item(inventory[0].id, 3)
    cart.add_item(inventory[1].id, 1)

    assert cart.total == Decimal("22.50")
    assert cart.vendor_id == vendor.id

    items = cart.to_order_items()
    assert [(i.name, i.quantity, i.price) for i in items] == [
        ("20L Bottle", 3, Decimal("2.50")),
        ("Dispenser", 1, Decimal("15.00")),
    ]


def test_cart_prices_are_a_snapshot(db, cart, inventory):
    """Test that price changes after loading do not reach the cart"""
    inventory[0].price = Decimal("9.99")
    db.commit()

    cart.add_item(inventory[0].id)
    assert cart.lines[0].price == Decimal("2.50")


def test_empty_area_has_no_vendor():
    """Test that an area without products has no vendor to order from"""
    cart = Cart([])
    assert cart.vendor_id is None
    assert cart.products == []
    assert cart.total == Decimal("0")


def test_clear(cart, inventory):
    cart.add_item(inventory[0].id, 2)
    cart.clear()
    assert cart.is_empty


def test_earliest_delivery_date_is_tomorrow():
    """Test that deliveries are booked from the next day"""
    assert BookingService.earliest_delivery_date(date(2024, 2, 28)) == date(2024, 2, 29)


def test_submit_requires_customer(vendor_ctx, cart, address, inventory):
    """Test that vendors cannot submit bookings"""
    cart.add_item(inventory[0].id)
    with pytest.raises(BookingError, match="Customer account required"):
        BookingService.submit(vendor_ctx, cart, address.id, "Morning")


def test_submit_empty_cart(customer_ctx, cart, address):
    """Test that an empty cart is rejected"""
    with pytest.raises(BookingError, match="add items to cart"):
        BookingService.submit(customer_ctx, cart, address.id, "Morning")


def test_submit_without_address(customer_ctx, cart, inventory):
    """Test that an address is required"""
    cart.add_item(inventory[0].id)
    with pytest.raises(BookingError, match="select an address"):
        BookingService.submit(customer_ctx, cart, None, "Morning")


def test_submit_with_past_delivery_date(customer_ctx, cart, address, inventory):
    """Test that the delivery date cannot be before tomorrow"""
    cart.add_item(inventory[0].id)
    today = date(2024, 6, 1)
    with pytest.raises(BookingError, match="2024-06-02"):
        BookingService.submit(customer_ctx, cart, address.id, "Morning", delivery_date=today, today=today)


def test_submit_with_chosen_delivery_date(customer_ctx, cart, address, inventory):
    """Test that a later delivery date is kept"""
    cart.add_item(inventory[0].id)
    chosen = date.today() + timedelta(days=5)
    result = BookingService.submit(customer_ctx, cart, address.id, "Morning", delivery_date=chosen)
    assert result.ok
    assert result.data.delivery_date == chosen


def test_load_cart_for_unknown_area(customer_ctx):
    """Test that loading an unknown area reports not found"""
    assert BookingService.load_cart(customer_ctx, uuid.uuid4()).is_not_found
