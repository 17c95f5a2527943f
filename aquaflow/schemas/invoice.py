from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional
from decimal import Decimal
from uuid import UUID

from aquaflow.models.invoice import InvoiceStatus
from aquaflow.schemas.base import AppModel, non_blank


class InvoiceCreate(AppModel):
    invoice_id: str = Field(..., min_length=1, max_length=64, description="Invoice display code (unique)")
    order_id: UUID
    amount: Decimal = Field(..., ge=0, description="Invoice amount")
    due_date: datetime
    status: InvoiceStatus = InvoiceStatus.DRAFT

    @field_validator('invoice_id')
    @classmethod
    def validate_invoice_id(cls, v: str) -> str:
        """Validate invoice code is not empty"""
        return non_blank(v, "Invoice code")


class InvoiceStatusUpdate(AppModel):
    status: InvoiceStatus


class InvoiceResponse(AppModel):
    id: UUID
    invoice_id: str
    order_id: Optional[UUID]
    amount: Decimal
    generated_date: datetime
    due_date: datetime
    status: InvoiceStatus
    created_at: datetime
