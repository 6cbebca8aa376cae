from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from app.schemas.common import KwdAmount, PartySummary, validate_kwd_places


class OpeningBalanceCreate(BaseModel):
    party_id: int = Field(..., gt=0)
    branch_id: Optional[int] = Field(None, gt=0)
    amount: Decimal = Field(..., description="Signed: positive means the party owes us / we owe the supplier")
    effective_date: date
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        return validate_kwd_places(v)


class OpeningBalanceResponse(BaseModel):
    id: int
    party_id: int
    party: Optional[PartySummary] = None
    branch_id: Optional[int] = None
    amount: KwdAmount
    effective_date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OpeningBalanceListResponse(BaseModel):
    total: int
    opening_balances: List[OpeningBalanceResponse]
