"""Shared schema types."""

from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, Field, PlainSerializer, field_validator

from app.utilities.money import format_kwd

# Serialized as a string with exactly 3 decimal places ("60.000")
KwdAmount = Annotated[Decimal, PlainSerializer(format_kwd, return_type=str, when_used="json")]


def validate_kwd_places(v: Decimal) -> Decimal:
    if v is not None and v.as_tuple().exponent < -3:
        raise ValueError('Max 3 decimal places')
    return v


class LineItemCreate(BaseModel):
    """Schema for one invoice line"""
    item_name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(default=1, gt=0, description="Quantity (must be positive)")
    price_kwd: Decimal = Field(..., ge=0, description="Unit price in KWD")

    @field_validator('price_kwd')
    @classmethod
    def validate_price(cls, v):
        return validate_kwd_places(v)

    class Config:
        json_schema_extra = {
            "example": {
                "item_name": "iPhone 15 128GB",
                "quantity": 2,
                "price_kwd": "245.500"
            }
        }


class LineItemResponse(BaseModel):
    id: int
    item_name: str
    quantity: int
    price_kwd: KwdAmount
    total_kwd: KwdAmount

    class Config:
        from_attributes = True


class PartySummary(BaseModel):
    id: int
    name: str
    phone: str | None = None

    class Config:
        from_attributes = True


def line_items_as_dicts(items: List[LineItemCreate]) -> List[dict]:
    return [item.model_dump() for item in items]
