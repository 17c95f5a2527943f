from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class AppModel(BaseModel):
    """Storage columns are snake_case; the application exchanges camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def non_blank(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field} cannot be empty")
    return value.strip()


def not_null(value, field: str):
    """Reject an explicit null for a column that has no null state"""
    if value is None:
        raise ValueError(f"{field} cannot be null")
    return value
