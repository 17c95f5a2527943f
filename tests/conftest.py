import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from aquaflow.core.context import RequestContext
from aquaflow.core.database import Base, get_db
from aquaflow.main import app
from aquaflow.models.address import Address
from aquaflow.models.inventory_item import InventoryItem
from aquaflow.models.service_area import ServiceArea
from aquaflow.models.user import User, UserType
from aquaflow.services.booking_service import BookingService


def identity_headers(user):
    """Headers the identity provider attaches for an authenticated user"""
    return {"X-User-Email": f"{user.user_id}@aquaflow.local"}


@pytest.fixture
def headers_for():
    return identity_headers


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory database for each test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db, user_id, name, user_type, phone=None):
    user = User(user_id=user_id, name=name, phone=phone, user_type=user_type)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def vendor(db):
    return _make_user(db, "bluewell", "BlueWell Water", UserType.VENDOR, phone="555-0100")


@pytest.fixture
def other_vendor(db):
    return _make_user(db, "clearspring", "Clear Spring", UserType.VENDOR)


@pytest.fixture
def customer(db):
    return _make_user(db, "alice", "Alice Smith", UserType.CUSTOMER, phone="555-0199")


@pytest.fixture
def other_customer(db):
    return _make_user(db, "bob", "Bob Jones", UserType.CUSTOMER)


@pytest.fixture
def vendor_ctx(db, vendor):
    return RequestContext(db=db, user=vendor)


@pytest.fixture
def customer_ctx(db, customer):
    return RequestContext(db=db, user=customer)


@pytest.fixture
def anon_ctx(db):
    return RequestContext(db=db)


@pytest.fixture
def vendor_headers(vendor):
    return identity_headers(vendor)


@pytest.fixture
def customer_headers(customer):
    return identity_headers(customer)


@pytest.fixture
def area(db, vendor):
    """Service area served by the vendor"""
    area = ServiceArea(name="Downtown", vendor_id=vendor.id, vendor_name=vendor.name)
    db.add(area)
    db.commit()
    db.refresh(area)
    return area


@pytest.fixture
def address(db, customer, area):
    """Customer's default address inside the vendor's area"""
    address = Address(
        user_id=customer.id,
        label="Home",
        street="12 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
        is_default=True,
        area_id=area.id,
    )
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


@pytest.fixture
def inventory(db, vendor):
    """Two products: a 20L bottle with 10 in stock and a dispenser with 3"""
    bottle = InventoryItem(
        vendor_id=vendor.id,
        name="20L Bottle",
        description="Purified drinking water",
        price=Decimal("2.50"),
        stock=10,
    )
    dispenser = InventoryItem(
        vendor_id=vendor.id,
        name="Dispenser",
        description="Countertop dispenser",
        price=Decimal("15.00"),
        stock=3,
    )
    db.add_all([bottle, dispenser])
    db.commit()
    db.refresh(bottle)
    db.refresh(dispenser)
    return [bottle, dispenser]


@pytest.fixture
def order(customer_ctx, address, inventory):
    """Pending order for four bottles"""
    cart = BookingService.load_cart(customer_ctx, address.area_id).data
    cart.add_item(inventory[0].id, 4)
    result = BookingService.submit(customer_ctx, cart, address.id, "Morning 9-12")
    assert result.ok, result.error
    return result.data
