from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional
from uuid import UUID

from aquaflow.models.user import UserType
from aquaflow.schemas.base import AppModel, non_blank


class UserCreate(AppModel):
    user_id: str = Field(..., min_length=1, max_length=255, description="Login handle (unique)")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    phone: Optional[str] = Field(None, max_length=50)
    user_type: UserType = Field(..., alias="type")
    area_id: Optional[UUID] = None
    service_area: Optional[str] = None

    @field_validator('user_id', 'name')
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        """Validate that required text is not just whitespace"""
        return non_blank(v, info.field_name)


class UserUpdate(AppModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    area_id: Optional[UUID] = None
    service_area: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        """Name may be omitted but never cleared"""
        return non_blank(v, "name")


class UserResponse(AppModel):
    id: UUID
    user_id: str
    name: str
    phone: Optional[str]
    user_type: UserType = Field(..., alias="type")
    area_id: Optional[UUID]
    service_area: Optional[str]
    created_at: datetime
