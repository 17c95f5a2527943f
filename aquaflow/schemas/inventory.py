from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional
from decimal import Decimal
from uuid import UUID

from aquaflow.schemas.base import AppModel, non_blank, not_null


class InventoryItemCreate(AppModel):
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    price: Decimal = Field(..., ge=0, description="Unit price (non-negative)")
    stock: int = Field(..., ge=0, description="Units on hand (non-negative)")
    description: str = Field(default="", max_length=1000)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is not empty or just whitespace"""
        return non_blank(v, "Product name")


class InventoryItemUpdate(AppModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        return non_blank(v, "Product name")

    @field_validator('price', 'stock', 'description')
    @classmethod
    def validate_not_null(cls, v, info):
        return not_null(v, info.field_name)


class InventoryItemResponse(AppModel):
    id: UUID
    vendor_id: Optional[UUID]
    name: str
    description: str
    price: Decimal
    stock: int
    created_at: datetime
