from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session
from typing import Optional

from app.core.dependencies import get_db
from app.models.party import PartyType
from app.schemas.opening_balance import OpeningBalanceCreate, OpeningBalanceListResponse, OpeningBalanceResponse
from app.services.opening_balance_service import (
    create_opening_balance,
    delete_opening_balance,
    get_all_opening_balances
)
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=OpeningBalanceListResponse)
def list_opening_balances(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    party_type: Optional[PartyType] = Query(None),
    party_id: Optional[int] = Query(None, gt=0),
    db: Session = Depends(get_db)
):
    balances, total = get_all_opening_balances(db, skip=skip, limit=limit, party_type=party_type, party_id=party_id)
    return OpeningBalanceListResponse(
        total=total,
        opening_balances=[OpeningBalanceResponse.model_validate(b) for b in balances]
    )


@router.post("", response_model=OpeningBalanceResponse, status_code=status.HTTP_201_CREATED)
def create_opening_balance_route(
    balance_data: OpeningBalanceCreate,
    db: Session = Depends(get_db)
):
    """
    Record a party's opening balance (one per party and branch).
    """
    try:
        balance = create_opening_balance(
            db=db,
            party_id=balance_data.party_id,
            amount=balance_data.amount,
            effective_date=balance_data.effective_date,
            branch_id=balance_data.branch_id,
            notes=balance_data.notes
        )
        return OpeningBalanceResponse.model_validate(balance)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error creating opening balance: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create opening balance"
        )


@router.delete("/{balance_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_opening_balance_route(
    balance_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    if not delete_opening_balance(db, balance_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Opening balance not found"
        )
    return None
