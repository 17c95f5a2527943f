from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, Uuid
import enum
import uuid

from aquaflow.core.database import Base, utcnow


class MessageSender(str, enum.Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"


class OrderMessage(Base):
    __tablename__ = "order_messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=True, index=True)
    sender = Column(
        Enum(
            MessageSender,
            name="message_sender",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
    )
    sender_name = Column(String, nullable=False)
    message = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
