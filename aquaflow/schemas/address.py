from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional
from uuid import UUID

from aquaflow.schemas.base import AppModel, non_blank, not_null


class AddressCreate(AppModel):
    label: str = Field(default="Home", max_length=100)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    is_default: bool = False
    area_id: Optional[UUID] = None

    @field_validator('street', 'city', 'state', 'zip_code')
    @classmethod
    def validate_present(cls, v: str, info) -> str:
        """Validate address parts are not blank"""
        return non_blank(v, info.field_name)


class AddressUpdate(AppModel):
    label: Optional[str] = Field(None, max_length=100)
    street: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    is_default: Optional[bool] = None
    area_id: Optional[UUID] = None

    @field_validator('street', 'city', 'state', 'zip_code')
    @classmethod
    def validate_present(cls, v: Optional[str], info) -> str:
        """Omitted parts are kept; sent parts cannot be blank or null"""
        return non_blank(v, info.field_name)

    @field_validator('label', 'is_default')
    @classmethod
    def validate_not_null(cls, v, info):
        return not_null(v, info.field_name)


class AddressResponse(AppModel):
    id: UUID
    user_id: Optional[UUID]
    label: str
    street: str
    city: str
    state: str
    zip_code: str
    is_default: bool
    area_id: Optional[UUID]
    created_at: datetime
