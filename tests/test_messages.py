from fastapi import status

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import ROW_LEVEL_SECURITY
from aquaflow.models.order_message import MessageSender
from aquaflow.schemas.order import MessageCreate
from aquaflow.services.message_service import MessageService
from aquaflow.services.order_service import OrderService


def test_customer_and_vendor_messages(customer_ctx, vendor_ctx, order):
    """Test that the sender is derived from the caller's side of the order"""
    first = MessageService.create_order_message(customer_ctx, order.id, MessageCreate(message="Gate code is 4411"))
    second = MessageService.create_order_message(vendor_ctx, order.id, MessageCreate(message="Thanks, noted"))

    assert first.ok and second.ok
    assert first.data.sender == MessageSender.CUSTOMER
    assert first.data.sender_name == "Alice Smith"
    assert second.data.sender == MessageSender.VENDOR
    assert second.data.sender_name == "BlueWell Water"

    thread = MessageService.list_order_messages(customer_ctx, order.id).data
    assert [m.message for m in thread] == ["Gate code is 4411", "Thanks, noted"]


def test_messages_are_part_of_order_details(customer_ctx, order):
    """Test that order reads carry the message thread"""
    MessageService.create_order_message(customer_ctx, order.id, MessageCreate(message="Please ring twice"))

    detail = OrderService.get_order(customer_ctx, order.id).data
    assert [m.message for m in detail.messages] == ["Please ring twice"]


def test_outsider_cannot_post(db, other_customer, order):
    """Test that only the order's customer and vendor can post"""
    ctx = RequestContext(db=db, user=other_customer)
    result = MessageService.create_order_message(ctx, order.id, MessageCreate(message="Hello?"))
    assert result.error.code == ROW_LEVEL_SECURITY


def test_outsider_cannot_read(db, other_customer, order):
    """Test that an outsider sees no thread"""
    ctx = RequestContext(db=db, user=other_customer)
    assert MessageService.list_order_messages(ctx, order.id).is_not_found


def test_message_endpoints(client, customer_headers, vendor_headers, order):
    """Test posting and reading messages over REST"""
    response = client.post(
        f"/api/orders/{order.id}/messages",
        json={"message": "Leave it at the door"},
        headers=customer_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["sender"] == "customer"
    assert data["senderName"] == "Alice Smith"

    response = client.get(f"/api/orders/{order.id}/messages", headers=vendor_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [m["message"] for m in response.json()] == ["Leave it at the door"]


def test_blank_message_is_rejected(client, customer_headers, order):
    """Test that whitespace-only messages are rejected"""
    response = client.post(
        f"/api/orders/{order.id}/messages",
        json={"message": "   "},
        headers=customer_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_outsider_post_endpoint(client, headers_for, other_customer, order):
    """Test that a policy denial maps to forbidden"""
    response = client.post(
        f"/api/orders/{order.id}/messages",
        json={"message": "Hello?"},
        headers=headers_for(other_customer),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
