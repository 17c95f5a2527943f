from pydantic import Field
from datetime import date
from typing import List, Optional
from uuid import UUID

from aquaflow.schemas.base import AppModel


class BookingLine(AppModel):
    inventory_item_id: UUID
    quantity: int = Field(..., gt=0)


class BookingRequest(AppModel):
    address_id: UUID
    lines: List[BookingLine] = Field(default_factory=list)
    preferred_time: str = Field(default="", max_length=255, description="Free-text delivery window")
    delivery_date: Optional[date] = Field(None, description="Defaults to tomorrow")
