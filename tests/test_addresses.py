from fastapi import status

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import ROW_LEVEL_SECURITY, ErrorKind
from aquaflow.schemas.address import AddressCreate, AddressUpdate
from aquaflow.services.address_service import AddressService


def _address(**overrides):
    data = {
        "label": "Office",
        "street": "400 Oak Ave",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62704",
    }
    data.update(overrides)
    return AddressCreate(**data)


def test_new_default_address_clears_previous_default(customer_ctx, address):
    """Test that at most one address stays default"""
    result = AddressService.create_address(customer_ctx, _address(is_default=True))
    assert result.ok

    addresses = AddressService.list_user_addresses(customer_ctx).data
    defaults = [a for a in addresses if a.is_default]
    assert len(defaults) == 1
    assert defaults[0].id == result.data.id
    assert addresses[0].id == result.data.id


def test_non_default_address_keeps_existing_default(customer_ctx, address):
    """Test that adding a non-default address leaves the default alone"""
    result = AddressService.create_address(customer_ctx, _address())
    assert result.ok

    addresses = AddressService.list_user_addresses(customer_ctx).data
    assert len(addresses) == 2
    assert addresses[0].id == address.id
    assert [a.is_default for a in addresses] == [True, False]


def test_update_to_default_clears_others(customer_ctx, address):
    """Test that promoting an address to default demotes the previous one"""
    office = AddressService.create_address(customer_ctx, _address()).data

    result = AddressService.update_address(customer_ctx, office.id, AddressUpdate(is_default=True))
    assert result.ok
    assert result.data.is_default is True

    defaults = [a for a in AddressService.list_user_addresses(customer_ctx).data if a.is_default]
    assert [a.id for a in defaults] == [office.id]


def test_partial_update_writes_only_given_fields(customer_ctx, address):
    """Test that omitted fields keep their stored values"""
    result = AddressService.update_address(customer_ctx, address.id, AddressUpdate(label="Main House"))
    assert result.ok
    assert result.data.label == "Main House"
    assert result.data.street == "12 Main St"
    assert result.data.is_default is True


def test_other_users_addresses_are_not_visible(db, other_customer, address):
    """Test that addresses are private to their owner"""
    ctx = RequestContext(db=db, user=other_customer)
    assert AddressService.list_user_addresses(ctx, address.user_id).data == []

    result = AddressService.get_address(ctx, address.id)
    assert result.is_not_found


def test_anonymous_address_list_is_empty(anon_ctx, address):
    """Test that an anonymous caller sees no addresses"""
    result = AddressService.list_user_addresses(anon_ctx, address.user_id)
    assert result.ok
    assert result.data == []


def test_create_address_for_other_user_is_denied(customer_ctx, other_customer):
    """Test that inserting an address for another user violates the ownership policy"""
    result = AddressService.create_address(customer_ctx, _address(), user_pk=other_customer.id)
    assert result.error.kind is ErrorKind.CONSTRAINT
    assert result.error.code == ROW_LEVEL_SECURITY


def test_delete_other_users_address(db, other_customer, address):
    """Test that deleting another user's address finds nothing"""
    ctx = RequestContext(db=db, user=other_customer)
    assert AddressService.delete_address(ctx, address.id).is_not_found


def test_create_address_endpoint(client, customer_headers, area):
    """Test adding an address over REST"""
    response = client.post(
        "/api/addresses",
        json={
            "label": "Home",
            "street": "9 Elm St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62702",
            "isDefault": True,
            "areaId": str(area.id),
        },
        headers=customer_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["zipCode"] == "62702"
    assert data["isDefault"] is True
    assert data["areaId"] == str(area.id)


def test_create_address_blank_street(client, customer_headers):
    """Test that address parts cannot be blank"""
    response = client.post(
        "/api/addresses",
        json={"street": "  ", "city": "Springfield", "state": "IL", "zipCode": "62702"},
        headers=customer_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_addresses_endpoint(client, customer_headers, address):
    """Test listing the caller's addresses"""
    response = client.get("/api/addresses", headers=customer_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [a["id"] for a in data] == [str(address.id)]


def test_list_addresses_requires_identity(client, address):
    """Test that listing addresses requires an identity"""
    response = client.get("/api/addresses")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_delete_address_endpoint(client, customer_headers, address):
    """Test deleting an address"""
    response = client.delete(f"/api/addresses/{address.id}", headers=customer_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get("/api/addresses", headers=customer_headers)
    assert response.json() == []


def test_update_address_with_null_is_rejected(client, customer_headers, address):
    """Test that required address fields can be omitted but not nulled"""
    for field in ("isDefault", "street", "label"):
        response = client.patch(f"/api/addresses/{address.id}", json={field: None}, headers=customer_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.patch(f"/api/addresses/{address.id}", json={"areaId": None}, headers=customer_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["areaId"] is None
    assert response.json()["isDefault"] is True
