"""Payment schemas"""

from decimal import Decimal
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.payment import PaymentDirection, PaymentType
from app.schemas.common import KwdAmount, PartySummary, validate_kwd_places


class PaymentSplitCreate(BaseModel):
    payment_type: PaymentType
    amount: Decimal = Field(..., gt=0)

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        return validate_kwd_places(v)


class PaymentCreate(BaseModel):
    """Create payment request"""
    direction: PaymentDirection
    party_id: int = Field(..., gt=0)
    payment_date: date
    payment_type: PaymentType = PaymentType.CASH
    amount: Optional[Decimal] = Field(default=None, gt=0)
    splits: Optional[List[PaymentSplitCreate]] = None
    reference: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=500)
    branch_id: Optional[int] = Field(default=None, gt=0)

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        return validate_kwd_places(v)

    @model_validator(mode='after')
    def require_amount_or_splits(self):
        if self.amount is None and not self.splits:
            raise ValueError('Either amount or splits must be provided')
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "direction": "IN",
                "party_id": 1,
                "payment_date": "2024-01-10",
                "payment_type": "Knet",
                "amount": "40.000"
            }
        }


class PaymentSplitResponse(BaseModel):
    id: int
    payment_type: PaymentType
    amount: KwdAmount

    class Config:
        from_attributes = True


class PaymentResponse(BaseModel):
    id: int
    direction: PaymentDirection
    party_id: int
    party: Optional[PartySummary] = None
    payment_date: date
    payment_type: PaymentType
    amount: KwdAmount
    reference: Optional[str] = None
    notes: Optional[str] = None
    branch_id: Optional[int] = None
    created_at: Optional[datetime] = None
    splits: List[PaymentSplitResponse] = []

    class Config:
        from_attributes = True


class PaymentListResponse(BaseModel):
    total: int
    skip: int
    limit: int
    payments: List[PaymentResponse]
