"""Purchase order schemas"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from app.schemas.common import KwdAmount, LineItemCreate, LineItemResponse, PartySummary


class PurchaseOrderCreate(BaseModel):
    supplier_id: int = Field(..., gt=0)
    purchase_date: date
    invoice_number: Optional[str] = Field(None, max_length=50)
    branch_id: Optional[int] = Field(None, gt=0)
    fx_currency: Optional[str] = Field(default="AED", min_length=3, max_length=3)
    fx_rate: Optional[Decimal] = Field(None, gt=0)
    total_fx: Optional[Decimal] = Field(None, ge=0)
    line_items: List[LineItemCreate] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "supplier_id": 2,
                "purchase_date": "2024-02-01",
                "invoice_number": "PB-77",
                "fx_currency": "AED",
                "fx_rate": "0.0840",
                "line_items": [
                    {"item_name": "Galaxy S24", "quantity": 4, "price_kwd": "50.000"}
                ]
            }
        }


class PurchaseOrderResponse(BaseModel):
    id: int
    purchase_date: date
    invoice_number: Optional[str] = None
    supplier_id: int
    supplier: Optional[PartySummary] = None
    branch_id: Optional[int] = None
    total_kwd: KwdAmount
    fx_currency: Optional[str] = None
    fx_rate: Optional[Decimal] = None
    total_fx: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    line_items: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class PurchaseOrderListResponse(BaseModel):
    total: int
    skip: int
    limit: int
    purchase_orders: List[PurchaseOrderResponse]
