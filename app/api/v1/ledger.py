"""
Ledger Routes
Current balance and account statement for customers and suppliers.

Balances are computed from the source transactions on every request.
Unknown parties and bad date ranges surface through the LedgerError
handlers (404 / 400).
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.models.party import PartyType
from app.schemas.ledger import BalanceResponse, StatementResponse
from app.services.ledger import DateRange, LedgerService

router = APIRouter()


@router.get(
    "/parties/{party_id}/balance",
    response_model=BalanceResponse,
    summary="Get a party's current balance",
    description="""
    Signed balance of a customer (what they owe us) or supplier (what we owe them).

    - **as_of**: ignore transactions dated after this day
    - **branch_id**: restrict to one branch
    - **party_type**: optional check that the party is of this type
    """
)
def get_party_balance(
    party_id: int = Path(..., gt=0),
    as_of: Optional[date] = Query(None),
    branch_id: Optional[int] = Query(None, gt=0),
    party_type: Optional[PartyType] = Query(None),
    db: Session = Depends(get_db)
):
    service = LedgerService(db)
    party = service.get_ledger_party(party_id, party_type)
    balance = service.balance_of(party, as_of=as_of, branch_id=branch_id)
    return BalanceResponse(
        party_id=party.id,
        party_type=party.party_type,
        as_of=as_of,
        branch_id=branch_id,
        balance=balance
    )


def _statement_response(
    db: Session,
    party_id: int,
    party_type: Optional[PartyType],
    start_date: Optional[date],
    end_date: Optional[date],
    branch_id: Optional[int]
) -> StatementResponse:
    date_range = DateRange(start=start_date, end=end_date)
    service = LedgerService(db)
    party = service.get_ledger_party(party_id, party_type)
    statement = service.statement_of(party, date_range, branch_id=branch_id)
    return StatementResponse.from_statement(party, statement, branch_id=branch_id)


@router.get(
    "/parties/{party_id}/statement",
    response_model=StatementResponse,
    summary="Get a party's account statement"
)
def get_party_statement(
    party_id: int = Path(..., gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    branch_id: Optional[int] = Query(None, gt=0),
    party_type: Optional[PartyType] = Query(None),
    db: Session = Depends(get_db)
):
    return _statement_response(db, party_id, party_type, start_date, end_date, branch_id)


@router.get(
    "/customer-statement",
    response_model=StatementResponse,
    summary="Get a customer statement"
)
def get_customer_statement(
    customer_id: int = Query(..., gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    branch_id: Optional[int] = Query(None, gt=0),
    db: Session = Depends(get_db)
):
    return _statement_response(db, customer_id, PartyType.customer, start_date, end_date, branch_id)


@router.get(
    "/public/statement/{customer_id}",
    response_model=StatementResponse,
    summary="Shareable customer statement",
    description="Read-only statement link sent to customers. Covers the whole history unless a range is given."
)
def get_public_statement(
    customer_id: int = Path(..., gt=0),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    return _statement_response(db, customer_id, PartyType.customer, start_date, end_date, None)
