from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.models.party import PartyType
from app.schemas.common import KwdAmount, validate_kwd_places


class PartyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=500)


class PartyCreate(PartyBase):
    party_type: PartyType = PartyType.supplier
    credit_limit: Optional[Decimal] = Field(None, ge=0, description="Customers only (KWD)")
    commission_rate: Optional[Decimal] = Field(None, ge=0, le=100, description="Salesmen only (%)")

    @field_validator('credit_limit')
    @classmethod
    def validate_credit_limit(cls, v):
        return validate_kwd_places(v)


class PartyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=500)
    party_type: Optional[PartyType] = None
    credit_limit: Optional[Decimal] = Field(None, ge=0)
    commission_rate: Optional[Decimal] = Field(None, ge=0, le=100)


class PartyResponse(PartyBase):
    id: int
    party_type: PartyType
    credit_limit: Optional[KwdAmount] = None
    commission_rate: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PartyListResponse(BaseModel):
    total: int
    parties: list[PartyResponse]
