from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional
from uuid import UUID

from aquaflow.schemas.base import AppModel, non_blank


class ServiceAreaCreate(AppModel):
    name: str = Field(..., min_length=1, max_length=255, description="Delivery zone name")
    vendor_id: Optional[UUID] = Field(None, description="Owning vendor; defaults to the caller")
    vendor_name: Optional[str] = Field(None, max_length=255, description="Defaults to the vendor's name")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is not empty or just whitespace"""
        return non_blank(v, "Service area name")


class ServiceAreaUpdate(AppModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    vendor_name: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator('name', 'vendor_name')
    @classmethod
    def validate_present(cls, v: Optional[str], info) -> str:
        """Both columns are required; an update may omit them but not clear them"""
        return non_blank(v, info.field_name)


class ServiceAreaResponse(AppModel):
    id: UUID
    name: str
    vendor_id: Optional[UUID]
    vendor_name: str
    created_at: datetime
