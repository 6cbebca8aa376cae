from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BranchCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=30)


class BranchResponse(BranchCreate):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
