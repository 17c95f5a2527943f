from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, CheckConstraint, Uuid
import uuid

from aquaflow.core.database import Base, utcnow


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    vendor_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_inventory_items_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_inventory_items_stock_non_negative"),
    )
