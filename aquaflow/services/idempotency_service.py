from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Session
from typing import Optional
import hashlib
import json
import uuid

from aquaflow.core.database import Base, utcnow


class OrderRequestKey(Base):
    """Client-supplied key for one order submission, scoped to the customer"""

    __tablename__ = "order_request_keys"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    request_key = Column(String, nullable=False)
    payload_hash = Column(String, nullable=False)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("customer_id", "request_key", name="uq_order_request_keys_customer_key"),
    )


class IdempotencyService:
    @staticmethod
    def hash_payload(order_data) -> str:
        """Stable digest of a booking request or order payload, used to detect key reuse"""
        canonical = json.dumps(order_data.model_dump(mode="json"), sort_keys=True)
        return hashlib.sha256(canonical.encode()).hexdigest()

    @staticmethod
    def find(db: Session, customer_id, request_key: str) -> Optional[OrderRequestKey]:
        return db.query(OrderRequestKey).filter(
            OrderRequestKey.customer_id == customer_id,
            OrderRequestKey.request_key == request_key,
        ).first()

    @staticmethod
    def remember(db: Session, customer_id, request_key: str, payload_hash: str, order_id) -> OrderRequestKey:
        """Stage the key in the current transaction; the caller commits"""
        record = OrderRequestKey(
            customer_id=customer_id,
            request_key=request_key,
            payload_hash=payload_hash,
            order_id=order_id,
        )
        db.add(record)
        return record
