"""Sales order schemas"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.schemas.common import KwdAmount, LineItemCreate, LineItemResponse, PartySummary


class SalesOrderCreate(BaseModel):
    customer_id: int = Field(..., gt=0)
    sale_date: date
    invoice_number: Optional[str] = Field(None, max_length=50)
    branch_id: Optional[int] = Field(None, gt=0)
    line_items: List[LineItemCreate] = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "sale_date": "2024-01-05",
                "invoice_number": "INV-1001",
                "line_items": [
                    {"item_name": "iPhone 15 128GB", "quantity": 1, "price_kwd": "100.000"}
                ]
            }
        }


class SalesOrderResponse(BaseModel):
    id: int
    sale_date: date
    invoice_number: Optional[str] = None
    customer_id: int
    customer: Optional[PartySummary] = None
    branch_id: Optional[int] = None
    total_kwd: KwdAmount
    created_at: Optional[datetime] = None
    line_items: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class SalesOrderListResponse(BaseModel):
    total: int
    skip: int
    limit: int
    sales_orders: List[SalesOrderResponse]
