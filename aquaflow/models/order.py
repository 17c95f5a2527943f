from sqlalchemy import (
    Column, String, Integer, Numeric, Date, DateTime, ForeignKey, Enum, CheckConstraint, Uuid,
)
from sqlalchemy.orm import relationship
import enum
import uuid

from aquaflow.core.database import Base, utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    ACKNOWLEDGED = "acknowledged"
    CONFIRMED = "confirmed"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    customer_user_id = Column(String, nullable=False)
    vendor_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    vendor_name = Column(String, nullable=False)
    area_id = Column(Uuid, ForeignKey("service_areas.id", ondelete="SET NULL"), nullable=True)
    address_id = Column(Uuid, ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True)
    total = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(
        Enum(
            OrderStatus,
            name="order_status",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    order_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    delivery_date = Column(Date, nullable=False)
    preferred_time = Column(String, nullable=False)
    invoice_id = Column(String, nullable=True)
    # Set once when stock has been decremented for this order's delivery
    inventory_adjusted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    items = relationship("OrderItem", back_populates="order", passive_deletes=True)


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=True, index=True)
    inventory_item_id = Column(Uuid, ForeignKey("inventory_items.id", ondelete="SET NULL"), nullable=True)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )
