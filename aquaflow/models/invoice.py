from sqlalchemy import Column, String, ForeignKey, Numeric, DateTime, Enum, Uuid
import enum
import uuid

from aquaflow.core.database import Base, utcnow


class InvoiceStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    invoice_id = Column(String, nullable=False, unique=True, index=True)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=True, index=True)
    amount = Column(Numeric(10, 2), nullable=False, default=0)
    generated_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(
        Enum(
            InvoiceStatus,
            name="invoice_status",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        default=InvoiceStatus.DRAFT,
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
