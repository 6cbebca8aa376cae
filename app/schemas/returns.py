"""Return schemas"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.returns import ReturnType
from app.schemas.common import KwdAmount, LineItemCreate, LineItemResponse, PartySummary


class ReturnCreate(BaseModel):
    return_type: ReturnType
    party_id: int = Field(..., gt=0, description="Customer for sale returns, supplier for purchase returns")
    return_date: date
    return_number: Optional[str] = Field(None, max_length=50)
    branch_id: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = Field(None, max_length=500)
    line_items: List[LineItemCreate] = Field(..., min_length=1)


class ReturnResponse(BaseModel):
    id: int
    return_type: ReturnType
    return_date: date
    return_number: Optional[str] = None
    party_id: int
    party: Optional[PartySummary] = None
    branch_id: Optional[int] = None
    total_kwd: KwdAmount
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    line_items: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class ReturnListResponse(BaseModel):
    total: int
    skip: int
    limit: int
    returns: List[ReturnResponse]
