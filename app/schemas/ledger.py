"""Balance and statement schemas"""

import datetime
from typing import List, Optional
from pydantic import BaseModel

from app.core.config import settings
from app.models.party import PartyType
from app.schemas.common import KwdAmount, PartySummary
from app.services.ledger.events import LedgerKind, Statement


class BalanceResponse(BaseModel):
    party_id: int
    party_type: PartyType
    as_of: Optional[datetime.date] = None
    branch_id: Optional[int] = None
    balance: KwdAmount
    currency: str = settings.CURRENCY_CODE

    class Config:
        json_schema_extra = {
            "example": {
                "party_id": 1,
                "party_type": "customer",
                "as_of": None,
                "branch_id": None,
                "balance": "60.000",
                "currency": "KWD"
            }
        }


class StatementEntryResponse(BaseModel):
    date: datetime.date
    kind: LedgerKind
    description: str
    reference_id: Optional[int] = None
    signed_amount: KwdAmount
    debit: KwdAmount
    credit: KwdAmount
    running_balance: KwdAmount


class StatementResponse(BaseModel):
    party: PartySummary
    party_type: PartyType
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    branch_id: Optional[int] = None
    opening_balance: KwdAmount
    closing_balance: KwdAmount
    currency: str = settings.CURRENCY_CODE
    entries: List[StatementEntryResponse]

    @classmethod
    def from_statement(cls, party, statement: Statement, branch_id: Optional[int] = None) -> "StatementResponse":
        return cls(
            party=PartySummary.model_validate(party),
            party_type=statement.party_type,
            start_date=statement.date_range.start,
            end_date=statement.date_range.end,
            branch_id=branch_id,
            opening_balance=statement.opening_balance,
            closing_balance=statement.closing_balance,
            entries=[
                StatementEntryResponse(
                    date=line.entry.date,
                    kind=line.entry.kind,
                    description=line.entry.description,
                    reference_id=line.entry.reference_id,
                    signed_amount=line.entry.signed_amount,
                    debit=line.entry.debit,
                    credit=line.entry.credit,
                    running_balance=line.running_balance,
                )
                for line in statement.lines
            ],
        )
